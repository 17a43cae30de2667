"""
Admin API — FastAPI service exposing the metrics engine over the remote
back-office REST API.
"""
