from paynotify.services.google_auth.google_auth import DEFAULT_SCOPES, GoogleAuth

__all__ = ["GoogleAuth", "DEFAULT_SCOPES"]
