"""Rentals domain - Public calendar of days the equipment is away"""
