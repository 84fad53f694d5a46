"""
Teams meeting bot.

Joins an automated participant into scheduled Microsoft Teams meetings
through the Graph communications API, tracks the joined call and fetches
the meeting transcript once Teams has produced it.
"""

__version__ = "1.0.0"
