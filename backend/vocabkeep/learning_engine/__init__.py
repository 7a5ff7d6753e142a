"""
Learning Engine Module.

Contains the review scheduling logic:
- Level state machine (pure transitions)
- Scheduling engine (due set and outcome recording)
"""
