"""Eventify registration and payment authorization flow."""
