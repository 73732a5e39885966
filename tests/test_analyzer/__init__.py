"""
Analyzer Tests

Statistics recording, event log export and the command line runner.
"""
