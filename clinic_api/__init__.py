"""Centro de Belleza public API"""
