"""
CyberVidya Attendance Bot

Scheduled monitoring for the CyberVidya student portal - tracks per-course
lecture attendance, detects changes since the last run and sends Telegram
notifications with attendance-risk figures.
"""

__version__ = "1.0.0"
