"""Errors, terminal output and build tool helpers"""
