from fieldvault.application.services.authentication_gate import AuthenticationGate

__all__ = ["AuthenticationGate"]
