from pagecraft.models.auth import AppRole, User, UserRole, UserInvitation  # noqa: F401
from pagecraft.models.content import Page, PageSection, ReusableComponent  # noqa: F401
from pagecraft.models.site import GlobalSetting, ContentType, ContentTypeItem, Media  # noqa: F401
