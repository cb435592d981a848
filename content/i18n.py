"""content.i18n

Static UI string tables (en / ru / uk).

No translation engine: a locale is just a key into TRANSLATIONS, with English
as the fallback for unknown locales and missing keys.
"""

from __future__ import annotations

from typing import Dict

from core.state import normalize_locale

# Language names as they should appear inside prompts.
LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "ru": "Russian",
    "uk": "Ukrainian",
}

EN: Dict[str, str] = {
    "title": "City Guesser",
    "tagline": "Test your geography knowledge!",
    "language": "Language",
    "select_difficulty": "Select Difficulty",
    "easy": "Easy",
    "medium": "Medium",
    "hard": "Hard",
    "easy_description": "Capital cities only",
    "medium_description": "Well-known cities",
    "hard_description": "Any cities worldwide",
    "start": "Start Game",
    "initializing": "Choosing a city...",
    "start_failed": "Couldn't start the round. Please try again.",
    "retry": "Try again",
    "hints": "Hints",
    "hints_will_appear": "Hints will appear here as you request them",
    "lets_play": "Let's play!",
    "next_hint": "Next hint!",
    "free_hints": "First 3 hints are free!",
    "per_hint": "-{cost} points per hint",
    "not_enough_points": "Not enough points ({score}/{cost})",
    "no_more_hints": "No more hints",
    "getting_hint": "Getting hint...",
    "hint_number": "Hint #",
    "city_name": "City Name",
    "enter_city_name": "Enter city name...",
    "different_from_map": "Different from map selection:",
    "submit_guess": "Submit Guess",
    "write_city_or_map": "Write city name or find it on the map",
    "wrong_guess": "Wrong! -{penalty} points",
    "you_won": "You Won! 🎉",
    "game_over": "Game Over! ☹️",
    "congratulations": "Congratulations! You correctly identified",
    "city_was": "The city was",
    "better_luck": "Better luck next time!",
    "play_again": "Play Again",
    "new_session": "New session",
    "difficulty_level": "Difficulty:",
    "points": "points",
    "map": "Map",
    "history": "History",
    "debug": "Debug",
    "play": "Play",
    "page": "Page",
    "no_rounds_yet": "No rounds played yet.",
    "last_raw_output": "Last raw model output",
    "download_round_log": "Download round log (JSON)",
    "llm_ready": "LLM ready ({backend} / {model})",
    "llm_offline": "LLM not configured: offline fallback",
    "something_went_wrong": "Something went wrong: {error}",
    "reveal_prefix": "The city's name:",
}

RU: Dict[str, str] = {
    "title": "City Guesser",
    "tagline": "Проверьте свои знания географии!",
    "language": "Язык",
    "select_difficulty": "Выберите сложность",
    "easy": "Легко",
    "medium": "Средне",
    "hard": "Сложно",
    "easy_description": "Только столицы",
    "medium_description": "Известные города",
    "hard_description": "Любые города мира",
    "start": "Начать игру",
    "initializing": "Загадываем город...",
    "start_failed": "Не удалось начать раунд. Попробуйте ещё раз.",
    "retry": "Повторить",
    "hints": "Подсказки",
    "hints_will_appear": "Подсказки будут появляться здесь по мере их запроса",
    "lets_play": "Играть!",
    "next_hint": "Следующая подсказка!",
    "free_hints": "Первые 3 подсказки бесплатно!",
    "per_hint": "-{cost} очков за подсказку",
    "not_enough_points": "Недостаточно очков ({score}/{cost})",
    "no_more_hints": "Подсказок больше нет",
    "getting_hint": "Получаем подсказку...",
    "hint_number": "Подсказка №",
    "city_name": "Название города",
    "enter_city_name": "Введите название города...",
    "different_from_map": "Отличается от выбора на карте:",
    "submit_guess": "Отправить ответ",
    "write_city_or_map": "Напишите название города или выберите его на карте",
    "wrong_guess": "Неверно! -{penalty} очков",
    "you_won": "Вы выиграли! 🎉",
    "game_over": "Игра окончена! ☹️",
    "congratulations": "Поздравляем! Вы правильно определили",
    "city_was": "Это",
    "better_luck": "Удачи в следующий раз!",
    "play_again": "Играть снова",
    "new_session": "Новая сессия",
    "difficulty_level": "Сложность:",
    "points": "очков",
    "map": "Карта",
    "history": "История",
    "debug": "Отладка",
    "play": "Игра",
    "page": "Страница",
    "no_rounds_yet": "Раундов пока не было.",
    "last_raw_output": "Последний ответ модели",
    "download_round_log": "Скачать журнал раунда (JSON)",
    "llm_ready": "LLM готова ({backend} / {model})",
    "llm_offline": "LLM не настроена: офлайн-режим",
    "something_went_wrong": "Что-то пошло не так: {error}",
    "reveal_prefix": "Название города:",
}

UK: Dict[str, str] = {
    "title": "City Guesser",
    "tagline": "Перевірте свої знання географії!",
    "language": "Мова",
    "select_difficulty": "Оберіть складність",
    "easy": "Легко",
    "medium": "Середньо",
    "hard": "Складно",
    "easy_description": "Лише столиці",
    "medium_description": "Відомі міста",
    "hard_description": "Будь-які міста світу",
    "start": "Почати гру",
    "initializing": "Загадуємо місто...",
    "start_failed": "Не вдалося почати раунд. Спробуйте ще раз.",
    "retry": "Повторити",
    "hints": "Підказки",
    "hints_will_appear": "Підказки з'являтимуться тут, коли ви їх запитаєте",
    "lets_play": "Граймо!",
    "next_hint": "Наступна підказка!",
    "free_hints": "Перші 3 підказки безкоштовні!",
    "per_hint": "-{cost} балів за підказку",
    "not_enough_points": "Недостатньо балів ({score}/{cost})",
    "no_more_hints": "Підказок більше немає",
    "getting_hint": "Отримуємо підказку...",
    "hint_number": "Підказка №",
    "city_name": "Назва міста",
    "enter_city_name": "Введіть назву міста...",
    "different_from_map": "Відрізняється від вибору на карті:",
    "submit_guess": "Надіслати відповідь",
    "write_city_or_map": "Напишіть назву міста або знайдіть його на карті",
    "wrong_guess": "Неправильно! -{penalty} балів",
    "you_won": "Ви виграли! 🎉",
    "game_over": "Гру закінчено! ☹️",
    "congratulations": "Вітаємо! Ви правильно визначили",
    "city_was": "Це було місто",
    "better_luck": "Щасти наступного разу!",
    "play_again": "Грати знову",
    "new_session": "Нова сесія",
    "difficulty_level": "Складність:",
    "points": "балів",
    "map": "Карта",
    "history": "Історія",
    "debug": "Налагодження",
    "play": "Гра",
    "page": "Сторінка",
    "no_rounds_yet": "Раундів ще не було.",
    "last_raw_output": "Остання відповідь моделі",
    "download_round_log": "Завантажити журнал раунду (JSON)",
    "llm_ready": "LLM готова ({backend} / {model})",
    "llm_offline": "LLM не налаштована: офлайн-режим",
    "something_went_wrong": "Щось пішло не так: {error}",
    "reveal_prefix": "Назва міста:",
}

TRANSLATIONS: Dict[str, Dict[str, str]] = {"en": EN, "ru": RU, "uk": UK}


def get_translations(locale: str) -> Dict[str, str]:
    """Locale table with English filled in for any missing key."""
    table = TRANSLATIONS.get(normalize_locale(locale), EN)
    return {**EN, **table}


def language_name(locale: str) -> str:
    return LANGUAGE_NAMES.get(normalize_locale(locale), "English")
