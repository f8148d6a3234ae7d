"""NiceGUI web interface for the chat client.

Renders conversation snapshots as plain text, offers a single PDF
attachment slot and surfaces submission errors as notifications.
"""
