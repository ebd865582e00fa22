"""
Package: console
Description: Command-line tools for the SQS queue transport.
"""
