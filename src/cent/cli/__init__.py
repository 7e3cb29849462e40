"""
Command Line Interface Package

The ``cent`` command: parse, allocate, distribute, convert and round money
amounts from the shell, plus configuration and version information.
"""
