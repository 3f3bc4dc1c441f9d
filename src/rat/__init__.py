"""
rat - command-line OAuth 2.0 authentication for third-party services.

Runs the authorization code flow for CenterDevice, Pocket and Slack and
prints the received tokens for the configuration file.
"""

__version__ = "0.1.0"
