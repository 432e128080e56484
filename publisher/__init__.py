"""Publish-time jobs built on the timeline compiler."""
