"""Localized strings for the bot."""
