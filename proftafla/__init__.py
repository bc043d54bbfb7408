"""
proftafla: University of Iceland exam timetable scraper with a Redis cache.
"""

__version__ = "0.1.0"
