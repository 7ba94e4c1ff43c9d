"""Field encryptor interface for the Security domain."""

from abc import ABC, abstractmethod

from fieldvault.domain.security.value_objects import Envelope


class FieldEncryptor(ABC):
    """Domain service interface for sealing single field values."""

    @abstractmethod
    def encrypt_field(self, plaintext: str, key_string: str, version: int) -> Envelope:
        """
        Encrypt one plaintext value into an Envelope.

        Parameters
        ----------
        plaintext
            The sensitive value to encrypt
        key_string
            Raw key string as configured (base64 or 32 raw characters)
        version
            Key version stamped into the envelope

        Returns
        -------
        A freshly sealed Envelope

        Raises
        ------
        MissingKeyError
            If ``key_string`` is empty
        InvalidKeyLengthError
            If the imported key is not 32 bytes
        EncryptionError
            If the cipher fails
        """
