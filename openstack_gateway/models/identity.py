# Keystone 인증 요청/응답 및 버전 디스커버리 스키마

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

AuthMethod = Literal["application_credential", "password"]
InterfaceKind = Literal["admin", "internal", "public"]
VersionStatus = Literal["CURRENT", "EXPERIMENTAL", "SUPPORTED", "DEPRECATED"]


class ApplicationCredentialSecret(BaseModel):
    id: str
    secret: str


class AuthIdentity(BaseModel):
    methods: List[AuthMethod]
    # See: https://docs.openstack.org/api-ref/identity/v3/#authenticating-with-an-application-credential
    application_credential: Optional[ApplicationCredentialSecret] = None


class AuthScope(BaseModel):
    identity: AuthIdentity


class AuthRequest(BaseModel):
    auth: AuthScope


class CatalogEndpoint(BaseModel):
    model_config = ConfigDict(extra="ignore")

    interface: InterfaceKind
    url: str
    id: Optional[str] = None
    region_id: Optional[str] = None
    region: Optional[str] = None


class ServiceCatalogEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    endpoints: List[CatalogEndpoint] = []


class AppCredentialInfo(BaseModel):
    id: str
    name: str
    restricted: bool


class TokenBody(BaseModel):
    catalog: List[ServiceCatalogEntry] = []
    application_credential: Optional[AppCredentialInfo] = None


class AuthResponse(BaseModel):
    token: TokenBody


class VersionLink(BaseModel):
    rel: str
    href: str


class VersionDescriptor(BaseModel):
    id: str
    status: VersionStatus
    links: List[VersionLink] = []


class VersionsResponse(BaseModel):
    versions: List[VersionDescriptor]
