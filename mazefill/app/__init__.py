"""Session state, run state machine and Qt controller."""
