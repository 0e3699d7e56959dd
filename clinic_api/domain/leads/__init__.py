"""Leads domain - Prize wheel claims"""
