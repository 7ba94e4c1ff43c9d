from fieldvault.application.ports.identity.current_user import CurrentUser
from fieldvault.application.ports.identity.identity_provider import IdentityProvider

__all__ = ["CurrentUser", "IdentityProvider"]
