"""Inquiries domain - Contact form relay to the clinic staff"""
