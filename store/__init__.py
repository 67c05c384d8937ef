"""Firebase Realtime Database client for order records."""
