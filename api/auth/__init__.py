"""
Authentication: email/password sign-in, JWT access tokens, rotating refresh tokens and the admin gate.
"""
