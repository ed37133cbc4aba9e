"""Helpers de seguridad: secretos compartidos y cabeceras Bearer."""

import hmac


def secret_matches(expected: str, supplied: str | None) -> bool:
    """Compara un secreto compartido en tiempo constante."""
    if supplied is None:
        return False
    return hmac.compare_digest(expected.encode(), supplied.encode())


def parse_bearer(authorization: str | None) -> str | None:
    """Extrae el token de una cabecera `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def mask_secret(value: str | None) -> str | None:
    """Enmascara secretos para logging seguro."""
    if not value:
        return value
    if len(value) <= 4:
        return "***"
    return f"{value[:2]}***{value[-2:]}"
