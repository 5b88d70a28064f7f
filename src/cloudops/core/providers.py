"""Built-in API descriptors.

These are also published through the ``cloudops.apis`` entry point group
in pyproject.toml, so installed and source checkouts see the same set.
"""

from __future__ import annotations

from cloudops.core.apis import ApiMetadata, ApiRegistry, ApiType

VCLOUD = (
    ApiMetadata.builder()
    .id("vcloud")
    .type(ApiType.COMPUTE)
    .name("VCloud 1.0 API")
    .identity_name("User at Organization (user@org)")
    .credential_name("Password")
    .documentation("http://www.vmware.com/support/pubs/vcd_pubs.html")
    .version("1.0")
    .build()
)

AZUREBLOB = (
    ApiMetadata.builder()
    .id("azureblob")
    .type(ApiType.BLOBSTORE)
    .name("Microsoft Azure Blob Service API")
    .identity_name("Account Name")
    .credential_name("Access Key")
    .documentation("http://msdn.microsoft.com/en-us/library/dd135733.aspx")
    .version("2009-09-19")
    .default_endpoint("https://{identity}.blob.core.windows.net")
    .build()
)

S3 = (
    ApiMetadata.builder()
    .id("s3")
    .type(ApiType.BLOBSTORE)
    .name("Amazon Simple Storage Service API")
    .identity_name("Access Key ID")
    .credential_name("Secret Access Key")
    .documentation("http://docs.amazonwebservices.com/AmazonS3/latest/API")
    .version("2006-03-01")
    .default_endpoint("https://s3.amazonaws.com")
    .build()
)

CLOUDSTACK = (
    ApiMetadata.builder()
    .id("cloudstack")
    .type(ApiType.COMPUTE)
    .name("Citrix CloudStack API")
    .identity_name("API Key")
    .credential_name("Secret Key")
    .documentation("http://download.cloud.com/releases/2.2.0/api_2.2.12/TOC_User.html")
    .version("2.2")
    .build()
)

OPENSTACK_NOVA = (
    ApiMetadata.builder()
    .id("openstack-nova")
    .type(ApiType.COMPUTE)
    .name("OpenStack Nova Diablo+ API")
    .identity_name("tenantName:user or userName")
    .credential_name("password")
    .documentation("http://api.openstack.org/")
    .version("1.1")
    .default_endpoint("http://localhost:5000")
    .build()
)

BUILTIN_APIS = (VCLOUD, AZUREBLOB, S3, CLOUDSTACK, OPENSTACK_NOVA)


def default_registry() -> ApiRegistry:
    """Return a registry holding the built-ins plus any entry point providers."""
    registry = ApiRegistry()
    for metadata in BUILTIN_APIS:
        registry.register(metadata)
    registry.load_entry_points()
    return registry
