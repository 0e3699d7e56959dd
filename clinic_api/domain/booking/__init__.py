"""Booking domain - Availability, conflict checking and web appointment requests"""
