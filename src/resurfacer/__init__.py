"""
Resurfacer - Spaced Repetition for Saved Posts
==============================================

Brings previously saved social-media posts back into a live, scrolling feed
on a spaced-repetition schedule. Marking a resurfaced post as remembered
doubles the wait before it shows up again; forgetting it resets the wait to
one day.

Main Packages:
    - core: review scheduler, configuration, exceptions, due-scan loop, library
    - feed: insertion queue manager and the host-view collaborator protocols
    - storage: in-memory and JSON-file item stores
    - cli: command-line control panel

Quick Start:
    from resurfacer.core import ReviewScheduler, ReviewOutcome

    scheduler = ReviewScheduler()
    item = scheduler.create_item("1789", {"text": "worth rereading"})
    item = scheduler.review(item, ReviewOutcome.POSITIVE)

Version: 1.0.0
"""

__version__ = "1.0.0"
