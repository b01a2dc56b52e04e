import json
from functools import lru_cache

from pydantic import ValidationError

from pickleseal.bootstrap.config.settings import PickleSealConfig
from pickleseal.core.envelope.secure import SecureEnvelope
from pickleseal.core.facade import LegacyCrypto
from pickleseal.infra.aes_cipher import AesCbcCipher
from pickleseal.infra.hmac_signer import HmacSha256Signer
from pickleseal.infra.pbkdf2 import Pbkdf2KeyDerivation, CachedPbkdf2KeyDerivation
from pickleseal.infra.pickle_serializer import PickleSerializer


def make_envelope(secret: str, cache_derived_key: bool = False) -> SecureEnvelope:
    """Envelope wired with the legacy primitives, for callers holding a secret directly."""
    kdf = CachedPbkdf2KeyDerivation() if cache_derived_key else Pbkdf2KeyDerivation()
    return SecureEnvelope(
        secret,
        kdf=kdf,
        cipher=AesCbcCipher(),
        signer=HmacSha256Signer(),
    )


def make_crypto(secret: str, cache_derived_key: bool = False) -> LegacyCrypto:
    return LegacyCrypto(
        envelope=make_envelope(secret, cache_derived_key),
        serializer=get_serializer()
    )


@lru_cache
def get_envelope() -> SecureEnvelope:
    config = get_config()
    return make_envelope(
        config.secret.get_secret_value(),
        cache_derived_key=config.cache_derived_key
    )


@lru_cache
def get_serializer() -> PickleSerializer:
    return PickleSerializer()


@lru_cache
def get_crypto() -> LegacyCrypto:
    return LegacyCrypto(
        envelope=get_envelope(),
        serializer=get_serializer()
    )


@lru_cache
def get_config() -> PickleSealConfig:
    try:
        return PickleSealConfig()  # type: ignore[call-arg]
    except FileNotFoundError as ex:
        raise SystemExit(f"Provide a correct configuration file path: {ex}")
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
