"""Fetching and parsing the BNM rates feed."""
