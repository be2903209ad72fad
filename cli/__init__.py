"""Command-line interface for mboxscan"""
