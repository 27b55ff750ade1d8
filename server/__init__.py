"""
Server modules for Venue Map application.

This package contains FastAPI router modules for the marker layout API and
configuration administration.

Author: Venue Map team
Date: 2026-10-17
"""
