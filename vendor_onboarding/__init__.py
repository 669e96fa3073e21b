"""Vendor onboarding API."""
