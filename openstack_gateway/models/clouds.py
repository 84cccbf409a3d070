# clouds.yaml 원본 레코드와 인증 방식별 CloudCredential 스키마

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

AuthType = Literal["v3totp", "v3token", "v3applicationcredential", "v3password"]


class RawAuth(BaseModel):
    """clouds.yaml 의 `auth:` 블록. 사람이 직접 편집하는 파일이라 전부 느슨하게 받는다."""

    # YAML 에서 따옴표 없는 숫자(passcode: 123456)는 int 로 읽힌다
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    auth_url: str
    project_name: Optional[str] = None
    project_domain_name: Optional[str] = None
    user_domain_name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    passcode: Optional[str] = None
    token: Optional[str] = None
    application_credential_id: Optional[str] = None
    application_credential_secret: Optional[str] = None


class RawCloud(BaseModel):
    model_config = ConfigDict(extra="ignore")

    auth_type: Optional[str] = None
    identity_api_version: Union[int, float, str] = 3
    auth: RawAuth


class BaseCredential(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    auth_url: str
    identity_api_version: str  # "v3" 형태로 정규화된 값


class TotpCredential(BaseCredential):
    auth_type: Literal["v3totp"] = "v3totp"
    project_name: str = ""
    project_domain_name: str = ""
    user_domain_name: str = ""
    username: str = ""
    passcode: str = ""


class TokenCredential(BaseCredential):
    auth_type: Literal["v3token"] = "v3token"
    project_name: str = ""
    project_domain_name: str = ""
    token: str = ""


class ApplicationCredential(BaseCredential):
    auth_type: Literal["v3applicationcredential"] = "v3applicationcredential"
    application_credential_id: str = ""
    application_credential_secret: str = ""


class PasswordCredential(BaseCredential):
    auth_type: Literal["v3password"] = "v3password"
    project_name: str = ""
    project_domain_name: str = ""
    user_domain_name: str = ""
    username: str = ""
    password: str = ""


CloudCredential = Annotated[
    Union[TotpCredential, TokenCredential, ApplicationCredential, PasswordCredential],
    Field(discriminator="auth_type"),
]
