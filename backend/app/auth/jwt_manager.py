from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional, Union
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from app.core.config import settings


class JWTManager:
    """Verifies bearer access tokens and mints them for development tooling."""

    def __init__(
        self,
        algorithm: str = settings.jwt_algorithm,
        secret_key: str = settings.jwt_secret_key,
        private_key_pem: Optional[str] = settings.jwt_private_key_pem,
        public_key_pem: Optional[str] = settings.jwt_public_key_pem,
        access_token_expire_minutes: int = settings.jwt_access_token_expire_minutes,
    ):
        self.algorithm = algorithm
        self.access_token_ttl = timedelta(minutes=access_token_expire_minutes)

        if algorithm.startswith("HS"):
            self.signing_key: Union[str, bytes] = secret_key
            self.verifying_key: Union[str, bytes] = secret_key
        elif private_key_pem:
            self.signing_key = private_key_pem
            self.verifying_key = public_key_pem or self._public_pem_from_private(private_key_pem)
        else:
            # No key material configured: tokens only verify within this process
            private_key = rsa.generate_private_key(
                public_exponent=65537,
                key_size=2048
            )
            self.signing_key = private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption()
            )
            self.verifying_key = private_key.public_key().public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo
            )

    @staticmethod
    def _public_pem_from_private(private_key_pem: str) -> bytes:
        private_key = serialization.load_pem_private_key(private_key_pem.encode(), password=None)
        return private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo
        )

    def create_access_token(self, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        """Create a new access token for a user id."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + (expires_delta if expires_delta is not None else self.access_token_ttl),
            "type": "access"
        }

        return jwt.encode(payload, self.signing_key, algorithm=self.algorithm)

    def verify_access_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Verify and decode an access token."""
        try:
            payload = jwt.decode(token, self.verifying_key, algorithms=[self.algorithm])
        except JWTError:
            return None

        # Check token type
        if payload.get("type") != "access":
            return None

        return payload


# Global JWT manager instance
jwt_manager = JWTManager()
