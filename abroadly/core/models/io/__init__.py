"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- common: camelCase base model, pagination and envelope helpers
- auth: registration, login and account models
- profiles: academic profile and favorites models
- universities / scholarships: catalogue models
- tasks: task, subtask and task group models
- chats: chat and message models
- ai: CV autofill, matching, chat and recommendation models
"""

from .ai import (
    AIChatRequest,
    AIChatResponse,
    CVTextRequest,
    MatchRequest,
    MatchResponse,
    ProfileAutofillResponse,
    RecommendedTask,
    TaskRecommendationsResponse,
    TaskSuggestionsRequest,
    TaskSuggestionsResponse,
    UniversityMatch,
)
from .auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserSummary
from .chats import (
    ChatCreate,
    ChatDetailResponse,
    ChatListResponse,
    ChatRead,
    ChatResponse,
    ChatUpdate,
    ChatWithMessagesRead,
    MessageCreate,
    MessageCreatedResponse,
    MessageListResponse,
    MessageRead,
)
from .common import CamelModel, ErrorResponse, MessageResponse, OffsetPagination, PagePagination
from .profiles import (
    AccountRead,
    FavoriteAddedResponse,
    FavoriteCheckResponse,
    FavoriteRead,
    FavoriteWithUniversity,
    ProfileRead,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdatedResponse,
    ScholarshipFavoriteAddedResponse,
    ScholarshipFavoriteRead,
    SuggestedUniversityPayload,
    UserInfoResponse,
    UserInfoUpdate,
)
from .scholarships import ScholarshipListResponse, ScholarshipRead, ScholarshipResponse, ScholarshipsResponse
from .tasks import (
    SubtaskCreate,
    SubtaskListResponse,
    SubtaskMessageResponse,
    SubtaskRead,
    SubtaskResponse,
    SubtaskUpdate,
    TaskCreate,
    TaskGroupCreate,
    TaskGroupRead,
    TaskGroupResponse,
    TaskGroupUpdate,
    TaskRead,
    TaskResponse,
    TaskStatusResponse,
    TaskStatusUpdate,
    TaskUpdate,
    TaskWithSubtasksRead,
)
from .universities import UniversityListResponse, UniversityRead, UniversityResponse

__all__ = [
    "AIChatRequest",
    "AIChatResponse",
    "AccountRead",
    "AuthResponse",
    "CVTextRequest",
    "CamelModel",
    "ChatCreate",
    "ChatDetailResponse",
    "ChatListResponse",
    "ChatRead",
    "ChatResponse",
    "ChatUpdate",
    "ChatWithMessagesRead",
    "ErrorResponse",
    "FavoriteAddedResponse",
    "FavoriteCheckResponse",
    "FavoriteRead",
    "FavoriteWithUniversity",
    "LoginRequest",
    "MatchRequest",
    "MatchResponse",
    "MeResponse",
    "MessageCreate",
    "MessageCreatedResponse",
    "MessageListResponse",
    "MessageRead",
    "MessageResponse",
    "OffsetPagination",
    "PagePagination",
    "ProfileAutofillResponse",
    "ProfileRead",
    "ProfileResponse",
    "ProfileUpdate",
    "ProfileUpdatedResponse",
    "RecommendedTask",
    "RegisterRequest",
    "ScholarshipFavoriteAddedResponse",
    "ScholarshipFavoriteRead",
    "ScholarshipListResponse",
    "ScholarshipRead",
    "ScholarshipResponse",
    "ScholarshipsResponse",
    "SubtaskCreate",
    "SubtaskListResponse",
    "SubtaskMessageResponse",
    "SubtaskRead",
    "SubtaskResponse",
    "SubtaskUpdate",
    "SuggestedUniversityPayload",
    "TaskCreate",
    "TaskGroupCreate",
    "TaskGroupRead",
    "TaskGroupResponse",
    "TaskGroupUpdate",
    "TaskRead",
    "TaskRecommendationsResponse",
    "TaskResponse",
    "TaskStatusResponse",
    "TaskStatusUpdate",
    "TaskSuggestionsRequest",
    "TaskSuggestionsResponse",
    "TaskUpdate",
    "TaskWithSubtasksRead",
    "UniversityListResponse",
    "UniversityMatch",
    "UniversityRead",
    "UniversityResponse",
    "UserInfoResponse",
    "UserInfoUpdate",
    "UserSummary",
]
