"""
Imports app for the PW Pattaya platform.

Bulk property import from the Google-Sheets owner/agent form export,
tracked per batch.
"""
