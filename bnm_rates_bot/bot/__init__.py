"""Chat-facing side of the bot: routing, formatting, transport and health."""
