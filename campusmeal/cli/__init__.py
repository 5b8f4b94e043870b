"""Unified command-line interface for campusmeal.

Usage:
    campusmeal dashboard
    campusmeal book LUNCH --method MOBILE_MONEY --mobile-number 0712345678
    campusmeal top-up 20
    campusmeal receipt <booking_id>
    campusmeal serve [--port]
    campusmeal stats
    campusmeal users [--page N]
    campusmeal report full --format csv
"""
