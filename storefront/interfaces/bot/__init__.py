"""Telegram bot interface."""
