"""
Venue Map application.

A FastAPI-powered service that lays out venue markers on the event map,
pushing overlapping bubbles apart by priority.

Author: Venue Map team
Date: 2026-10-17
"""
