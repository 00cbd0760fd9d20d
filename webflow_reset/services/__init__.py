"""Webflow services: API client, pacing, scanning, deletion, republishing"""
