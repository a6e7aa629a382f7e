"""Text presenters for the bot."""
