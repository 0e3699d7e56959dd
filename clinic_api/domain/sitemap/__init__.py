"""Sitemap domain - XML sitemap of static routes and published posts"""
