from typing import ClassVar, TypeVar

from serdevault.utils.dataModels import KdfParams
from serdevault.vault import VaultFile

M = TypeVar("M", bound="VaultModel")


class VaultModel:
    """Mixin binding a dataclass to a fixed vault path.

        @dataclass
        class AppConfig(VaultModel):
            VAULT_PATH = "~/.app.vault"
            api_key: str

        AppConfig(api_key="...").save("pw")
        cfg = AppConfig.load("pw")
    """

    VAULT_PATH: ClassVar[str]
    VAULT_KDF_PARAMS: ClassVar[KdfParams | None] = None

    @classmethod
    def vault(cls, password: str) -> VaultFile:
        vault = VaultFile(cls.VAULT_PATH, password)
        if cls.VAULT_KDF_PARAMS is not None:
            vault.with_params(*cls.VAULT_KDF_PARAMS.as_tuple())
        return vault

    def save(self, password: str) -> None:
        with self.vault(password) as vault:
            vault.save(self)

    @classmethod
    def load(cls: type[M], password: str) -> M:
        with cls.vault(password) as vault:
            return vault.load(cls)
