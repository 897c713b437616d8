"""Utterance interpretation.

The interpreter layer converts a free-form English utterance into a strict `Command` object, which
is then handed to the task executor.
"""
