"""FieldVault - field-level envelope encryption for stored banking records.

Architecture:
    fieldvault/
    ├── domain/          # Records, envelopes, encryption interfaces
    ├── application/     # Commands, ports, authentication gate
    ├── infrastructure/  # AES-GCM, key ring, SQLAlchemy, identity adapters
    └── presentation/    # FastAPI app
"""
