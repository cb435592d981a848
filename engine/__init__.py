"""engine

Round orchestration: city catalog, hint generator and round state machine.
"""
