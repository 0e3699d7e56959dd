"""Metrics domain - Page view counter"""
