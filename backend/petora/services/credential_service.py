"""
Petora Backend - Credential Service
====================================

What:  One-way password hashing and verification with bcrypt.
How:   bcrypt with a configurable work factor (settings.bcrypt_rounds).
       Both operations are CPU-bound, so they run in a worker thread and the
       event loop keeps serving other requests meanwhile.
Who:   AuthService calls `hash()` when a new user is built at registration
       and `verify()` at login. Nothing else touches passwords.

Invariants:
    - Plaintext passwords are never stored or logged.
    - `verify()` never raises: a mismatch or a malformed hash is False.
"""

import asyncio
import logging

import bcrypt

logger = logging.getLogger(__name__)


class CredentialService:
    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash_sync(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def verify_sync(self, plaintext: str, hashed: str) -> bool:
        if not plaintext or not hashed:
            return False
        try:
            # checkpw compares in constant time
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed; treating as mismatch")
            return False

    async def hash(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hash_sync, plaintext)

    async def verify(self, plaintext: str, hashed: str) -> bool:
        return await asyncio.to_thread(self.verify_sync, plaintext, hashed)
