from app.models.user import User
from app.models.verification import VerificationRecord, ChildProfile
from app.models.child_data_request import ChildDataRequest
from app.models.permission_grant import PermissionGrant
from app.models.conversation import Conversation, Message
from app.models.review import Review
from app.models.user_session import UserSession
from app.models.audit_log import AuditLog
