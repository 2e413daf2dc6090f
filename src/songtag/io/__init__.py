"""Adapters around the external command-line tools.

Every tool is invoked with an argument vector; nothing here goes through a
shell. Failures surface as songtag.errors.ToolError.
"""
