"""Helpers shared by the web layer: logging setup and reCAPTCHA verification."""
