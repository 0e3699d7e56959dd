"""Shared validation and sanitization utilities"""
