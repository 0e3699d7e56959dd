"""Domain packages: one per public site flow"""
