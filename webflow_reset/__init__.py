"""webflow-reset: remove all items from your Webflow CMS"""

__version__ = "1.0.0"
