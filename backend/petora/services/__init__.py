# Services package init
"""
Petora Backend - Services Layer
================================

What:  Domain logic sitting between routes (HTTP) and the entity store.
How:   Services receive their collaborators in the constructor. The
       application factory builds one `Services` bundle from the settings
       and the database and keeps it on `app.state.services`.

Service Inventory:
    - CredentialService:  bcrypt hashing and verification
    - SessionService:     JWT issue / verify
    - MediaService:       pet image intake and storage
    - AuthService:        register / login
    - ShelterService:     create / list shelters
    - PetService:         list / get / create / update / delete pets
    - ApplicationService: submit / list adoption applications
"""

from dataclasses import dataclass

from petora.config import Settings
from petora.database import MongoDatabase
from petora.services.application_service import ApplicationService
from petora.services.auth_service import AuthService
from petora.services.credential_service import CredentialService
from petora.services.media_service import MediaService
from petora.services.pet_service import PetService
from petora.services.session_service import SessionService
from petora.services.shelter_service import ShelterService
from petora.store import Stores


@dataclass
class Services:
    stores: Stores
    credentials: CredentialService
    sessions: SessionService
    media: MediaService
    auth: AuthService
    shelters: ShelterService
    pets: PetService
    applications: ApplicationService

    @classmethod
    def build(cls, settings: Settings, database: MongoDatabase) -> "Services":
        """Wire every service from the configuration and the database."""
        stores = Stores.for_database(database)
        credentials = CredentialService(rounds=settings.bcrypt_rounds)
        sessions = SessionService(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl_hours=settings.token_ttl_hours,
        )
        media = MediaService(
            upload_root=settings.upload_root,
            url_prefix=settings.upload_url_prefix,
            field_name=settings.upload_field_name,
        )
        return cls(
            stores=stores,
            credentials=credentials,
            sessions=sessions,
            media=media,
            auth=AuthService(stores, credentials, sessions),
            shelters=ShelterService(stores),
            pets=PetService(stores, media),
            applications=ApplicationService(stores),
        )


__all__ = [
    "ApplicationService",
    "AuthService",
    "CredentialService",
    "MediaService",
    "PetService",
    "Services",
    "SessionService",
    "ShelterService",
]
