import pytest

from serdevault import KdfParams, VaultFile

# Low-cost Argon2 params so tests run in milliseconds instead of seconds.
LOW_COST = KdfParams(8, 1, 1)


@pytest.fixture
def vault_path(tmp_path):
    return tmp_path / "vault.svlt"


@pytest.fixture
def make_vault(vault_path):
    """Factory for low-cost handles on the shared vault path."""
    def _make(password: str = "pwd", path=None) -> VaultFile:
        return VaultFile(path or vault_path, password).with_params(*LOW_COST.as_tuple())
    return _make
