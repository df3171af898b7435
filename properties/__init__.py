"""
Properties app for the PW Pattaya platform.

This app manages property listings, development projects and the property
form templates used by the back office.
"""
