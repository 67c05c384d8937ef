"""Transactional email: HTML templates and the Resend delivery client."""
