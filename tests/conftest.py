import pytest

from pickleseal.bootstrap.config.loader import get_configfile
from pickleseal.bootstrap.deps import make_envelope, make_crypto, get_config, get_envelope, get_crypto
from pickleseal.core.envelope.secure import SecureEnvelope
from pickleseal.core.facade import LegacyCrypto
from pickleseal.infra.aes_cipher import AesCbcCipher
from pickleseal.infra.hmac_signer import HmacSha256Signer
from pickleseal.infra.pbkdf2 import Pbkdf2KeyDerivation

from tests.fake.fake_crypto import RecordingKeyDerivation, RecordingSigner

SECRET = "legacy-column-secret"


@pytest.fixture(scope="session")
def secret() -> str:
    return SECRET


@pytest.fixture(scope="session")
def derived_key(secret) -> bytes:
    return Pbkdf2KeyDerivation().derive(secret.encode())


@pytest.fixture
def envelope(secret) -> SecureEnvelope:
    return make_envelope(secret)


@pytest.fixture
def crypto(secret) -> LegacyCrypto:
    return make_crypto(secret, cache_derived_key=True)


@pytest.fixture
def kdf(derived_key) -> RecordingKeyDerivation:
    return RecordingKeyDerivation(derived_key)


@pytest.fixture
def signer() -> RecordingSigner:
    return RecordingSigner()


@pytest.fixture
def spied_envelope(secret, kdf, signer) -> SecureEnvelope:
    return SecureEnvelope(
        secret,
        kdf=kdf,
        cipher=AesCbcCipher(),
        signer=signer,
        clock=lambda: 1_700_000_000.75,
        iv_factory=lambda n: bytes(range(n)),
    )


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """Isolate configuration from the host: no env secret, no config file."""
    for name in ("PICKLESEAL_SECRET", "ENCRYPT_COLUMN_SECRET", "PICKLESEALCONFIG",
                 "PICKLESEAL_CACHE_DERIVED_KEY", "PICKLESEAL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    caches = (get_configfile, get_config, get_envelope, get_crypto)
    for cached in caches:
        cached.cache_clear()
    yield tmp_path
    for cached in caches:
        cached.cache_clear()
