"""
Leads app for the PW Pattaya platform.

Stores contact requests sent from the public website and notifies the office.
"""
