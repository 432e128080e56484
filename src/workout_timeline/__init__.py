"""Workout timeline compiler — blocks in, absolute-timestamped steps out."""
