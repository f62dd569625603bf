"""Server certificate public key pinning.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from typing import Awaitable, Callable

import httpx
from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    PublicFormat,
)

from .exceptions import PublicKeyPinningError


def get_public_key_string(certificate: x509.Certificate) -> str:
    """Get hex of the certificate subject public key.

    RSA keys are PKCS#1, EC keys are uncompressed points, i.e. the bit
    string of SubjectPublicKeyInfo without the algorithm.
    """
    key = certificate.public_key()
    if isinstance(key, rsa.RSAPublicKey):
        data = key.public_bytes(Encoding.DER, PublicFormat.PKCS1)
    elif isinstance(key, ec.EllipticCurvePublicKey):
        data = key.public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)
    else:
        data = key.public_bytes(
            Encoding.DER,
            PublicFormat.SubjectPublicKeyInfo,
        )
    return data.hex().upper()


def make_pinning_hook(
    public_key: str,
) -> Callable[[httpx.Response], Awaitable[None]]:
    """Create response hook comparing the peer key with ``public_key``."""
    expected = public_key.strip().upper()

    async def check_public_key(response: httpx.Response) -> None:
        stream = response.extensions.get("network_stream")
        ssl_object = stream.get_extra_info("ssl_object") if stream else None
        if ssl_object is None:
            raise PublicKeyPinningError("Connection is not TLS protected")

        der = ssl_object.getpeercert(binary_form=True)
        if not der:
            raise PublicKeyPinningError("Server certificate is missing")

        certificate = x509.load_der_x509_certificate(der)
        if get_public_key_string(certificate) != expected:
            raise PublicKeyPinningError(
                f"Public key of {response.url.host} does not match",
            )

    return check_public_key
