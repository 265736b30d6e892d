"""HTTP client for the FocusHero API"""
from .api_client import APIClient, FocusHeroAPIError, FocusHeroClient, MotivationAPI, SessionsAPI, SettingsAPI

__all__ = ["APIClient", "FocusHeroAPIError", "FocusHeroClient", "MotivationAPI", "SessionsAPI", "SettingsAPI"]
