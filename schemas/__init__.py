# Schemas module for TapOnce
# Organizes all Pydantic schemas in a modular structure

from schemas.agents import (
    CamelModel,
    clean_indian_phone,

    # Agent schemas
    AgentApplicationCreate,
    ApplicationReject,
    AgentCreate,
    AgentUpdate,
    AgentMspSet,

    # Payout schemas
    PayoutCreate,
    PayoutRequest,
)

from schemas.orders import (
    # Enums
    Material,
    PaymentMethod,

    # Order schemas
    ShippingAddress,
    DirectOrderSubmit,
    TrackRequest,
    StatusUpdate,
    OrderPatch,
    ApproveRequest,
    RejectRequest,
    CommissionPreviewRequest,
    AgentOrderCreate,

    # Draft schemas
    DraftCreate,
    DraftUpdate,
    DraftResponse,

    # Claim schemas
    ClaimAccountRequest,
)

from schemas.catalog import CardDesignCreate, CardDesignUpdate
from schemas.auth import RegisterRequest, LoginRequest, UserResponse
from schemas.profiles import CustomLink, PublicProfile, CustomerProfileUpdate
