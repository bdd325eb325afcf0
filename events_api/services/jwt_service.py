"""
Bearer token verification for the Events Registry API.
A token is accepted when it decodes with the configured secret, has not
expired and names its subject.
"""

from typing import Optional, Dict, Any
from jose import JWTError, jwt
import logging

from ..core.config import config

logger = logging.getLogger(__name__)

# The subject is the caller identity handed to protected routes
DECODE_OPTIONS = {"require_sub": True, "verify_sub": True}


class JWTService:
    """
    Decodes bearer tokens and resolves the calling subject.
    """

    def __init__(self):
        self.secret_key: Optional[str] = None
        self.algorithm: Optional[str] = None
        self._initialized = False

    async def initialize(self):
        """Load the signing secret and algorithm from configuration."""
        self.secret_key = await config.get_jwt_secret()
        self.algorithm = await config.get_jwt_algorithm()
        self._initialized = True

    def decode(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Decode a token and check its signature and claims.

        Args:
            token: Encoded JWT

        Returns:
            Token claims if valid, None otherwise
        """
        if not self._initialized:
            logger.error("JWT service not initialized")
            return None

        try:
            return jwt.decode(
                token, self.secret_key, algorithms=[self.algorithm], options=DECODE_OPTIONS
            )
        except JWTError as e:
            logger.warning(f"Rejected bearer token: {e}")
            return None

    def authenticate(self, token: str) -> Optional[str]:
        """Return the subject a valid token was issued to."""
        claims = self.decode(token)
        if claims is None:
            return None
        return claims["sub"]
