"""
Dependency Injection container for Facteur.

Manages lifecycle and dependencies of all application components.
"""

import logging
from datetime import datetime
from typing import Optional

from shared.reporter import SystemReporter
from shared.reporter.emojis import Emoji

from facteur.application.use_cases import (
    AuthenticateConnectionUseCase,
    GetConversationUseCase,
    HandleInboundEventUseCase,
    ManageRelationshipUseCase,
    ParseInboundEventUseCase,
    SendMessageUseCase,
)
from facteur.config.settings import Settings
from facteur.domain.repositories import IMessageRepository, IUserRepository
from facteur.domain.services import MessageClock
from facteur.infrastructure.auth import JWTVerifier
from facteur.infrastructure.locking import KeyedLock
from facteur.infrastructure.persistence import (
    Database,
    InMemoryMessageRepository,
    InMemoryUserRepository,
    MessageRepository,
    UserRepository,
)
from facteur.infrastructure.rate_limiting import RateLimiter
from facteur.infrastructure.shutdown import ShutdownManager
from facteur.infrastructure.websocket import EventRouter, PresenceRegistry


class Container:
    """
    Dependency Injection container.

    Creates and manages all application dependencies. Every shared
    resource is a lazily created singleton owned by this container, so
    two containers never share presence or storage state.
    """

    def __init__(self, settings: Settings, reporter: Optional[SystemReporter] = None):
        """
        Initialize container with settings.

        Args:
            settings: Application settings
            reporter: Optional reporter (built from settings if omitted)
        """
        self.settings = settings
        self._reporter = reporter

        # Shared infrastructure
        self._database: Optional[Database] = None
        self._user_repository: Optional[IUserRepository] = None
        self._message_repository: Optional[IMessageRepository] = None
        self._presence: Optional[PresenceRegistry] = None
        self._event_router: Optional[EventRouter] = None
        self._jwt_verifier: Optional[JWTVerifier] = None
        self._rate_limiter: Optional[RateLimiter] = None
        self._shutdown_manager: Optional[ShutdownManager] = None
        self._user_locks = KeyedLock()
        self._clock = MessageClock()

        # Use cases
        self._authenticate_use_case: Optional[AuthenticateConnectionUseCase] = None
        self._parse_use_case: Optional[ParseInboundEventUseCase] = None
        self._send_message_use_case: Optional[SendMessageUseCase] = None
        self._relationship_use_case: Optional[ManageRelationshipUseCase] = None
        self._conversation_use_case: Optional[GetConversationUseCase] = None
        self._inbound_use_case: Optional[HandleInboundEventUseCase] = None

        # Statistics
        self.stats = {
            "total_connections": 0,
            "total_events_received": 0,
            "total_messages_sent": 0,
            "rate_limit_hits": 0,
            "rate_limit_hits_per_type": {},
            "validation_failures": 0,
            "auth_failures": 0,
            "connection_rejections": 0,
            "connection_rejections_by_type": {},
            "start_time": datetime.utcnow(),
        }

    # ================================================================
    # Infrastructure
    # ================================================================

    @property
    def reporter(self) -> SystemReporter:
        if self._reporter is None:
            self._reporter = SystemReporter(
                name="facteur",
                log_dir=self.settings.log_dir,
                level=getattr(logging, self.settings.log_level.upper()),
                verbose=self.settings.verbose,
            )
        return self._reporter

    @property
    def database(self) -> Database:
        if self._database is None:
            self._database = Database(
                database_url=self.settings.database_url,
                echo=self.settings.database_echo,
                pool_size=self.settings.database_pool_size,
            )
        return self._database

    @property
    def uses_database(self) -> bool:
        return self.settings.storage_backend == "sql"

    @property
    def user_repository(self) -> IUserRepository:
        if self._user_repository is None:
            if self.uses_database:
                self._user_repository = UserRepository(self.database)
            else:
                self._user_repository = InMemoryUserRepository()
        return self._user_repository

    @property
    def message_repository(self) -> IMessageRepository:
        if self._message_repository is None:
            if self.uses_database:
                self._message_repository = MessageRepository(self.database)
            else:
                self._message_repository = InMemoryMessageRepository()
        return self._message_repository

    @property
    def presence(self) -> PresenceRegistry:
        """PresenceRegistry singleton with configured connection limits."""
        if self._presence is None:
            self._presence = PresenceRegistry(
                max_total_connections=self.settings.max_total_connections,
                max_connections_per_user=self.settings.max_connections_per_user,
                reporter=self.reporter,
            )
        return self._presence

    @property
    def event_router(self) -> EventRouter:
        if self._event_router is None:
            self._event_router = EventRouter(self.presence, reporter=self.reporter)
        return self._event_router

    @property
    def jwt_verifier(self) -> JWTVerifier:
        if self._jwt_verifier is None:
            if not self.settings.jwt_secret:
                raise ValueError("jwt_secret not configured")

            claims = [self.settings.jwt_subject_claim]
            if "id" not in claims:
                claims.append("id")

            self._jwt_verifier = JWTVerifier(
                secret=self.settings.jwt_secret,
                algorithm=self.settings.jwt_algorithm,
                subject_claims=claims,
                leeway=self.settings.jwt_leeway_seconds,
            )
        return self._jwt_verifier

    @property
    def rate_limiter(self) -> Optional[RateLimiter]:
        """
        Inbound event rate limiter.

        Returns:
            RateLimiter instance if rate limiting enabled, None otherwise
        """
        if not self.settings.rate_limit_enabled:
            return None

        if self._rate_limiter is None:
            self._rate_limiter = RateLimiter(
                limit=self.settings.rate_limit_events,
                window_seconds=self.settings.rate_limit_window_seconds,
                per_type_limits=self.settings.rate_limit_per_type,
            )
        return self._rate_limiter

    @property
    def shutdown_manager(self) -> ShutdownManager:
        if self._shutdown_manager is None:
            self._shutdown_manager = ShutdownManager(
                grace_period=self.settings.shutdown_grace_period,
                reporter=self.reporter,
            )
        return self._shutdown_manager

    # ================================================================
    # Use cases
    # ================================================================

    def get_authenticate_use_case(self) -> AuthenticateConnectionUseCase:
        if self._authenticate_use_case is None:
            self._authenticate_use_case = AuthenticateConnectionUseCase(
                self.jwt_verifier
            )
        return self._authenticate_use_case

    def get_parse_use_case(self) -> ParseInboundEventUseCase:
        if self._parse_use_case is None:
            self._parse_use_case = ParseInboundEventUseCase(
                max_message_size=self.settings.max_message_size
            )
        return self._parse_use_case

    def get_send_message_use_case(self) -> SendMessageUseCase:
        if self._send_message_use_case is None:
            self._send_message_use_case = SendMessageUseCase(
                message_repository=self.message_repository,
                event_router=self.event_router,
                clock=self._clock,
                max_content_length=self.settings.max_content_length,
                reporter=self.reporter,
            )
        return self._send_message_use_case

    def get_relationship_use_case(self) -> ManageRelationshipUseCase:
        if self._relationship_use_case is None:
            self._relationship_use_case = ManageRelationshipUseCase(
                user_repository=self.user_repository,
                event_router=self.event_router,
                user_locks=self._user_locks,
                reporter=self.reporter,
            )
        return self._relationship_use_case

    def get_conversation_use_case(self) -> GetConversationUseCase:
        if self._conversation_use_case is None:
            self._conversation_use_case = GetConversationUseCase(
                self.message_repository,
                max_page_size=self.settings.max_page_size,
            )
        return self._conversation_use_case

    def get_inbound_use_case(self) -> HandleInboundEventUseCase:
        if self._inbound_use_case is None:
            self._inbound_use_case = HandleInboundEventUseCase(
                send_message=self.get_send_message_use_case(),
                manage_relationship=self.get_relationship_use_case(),
                reporter=self.reporter,
            )
        return self._inbound_use_case

    # ================================================================
    # Lifecycle
    # ================================================================

    async def startup(self) -> None:
        """Open resources that need I/O (database tables)."""
        if self.uses_database:
            await self.database.connect()
            self.reporter.info(
                f"{Emoji.SYSTEM.DATABASE} Database connected",
                context="Container",
                verbose_level=1,
            )

    async def shutdown(self) -> None:
        if self._database is not None:
            await self._database.disconnect()

    # ================================================================
    # Statistics
    # ================================================================

    def increment_stat(self, stat_name: str, amount: int = 1) -> None:
        if stat_name in self.stats:
            self.stats[stat_name] += amount

    def increment_rate_limit_hit(self, message_type: Optional[str] = None) -> None:
        self.stats["rate_limit_hits"] += 1
        if message_type:
            per_type = self.stats["rate_limit_hits_per_type"]
            per_type[message_type] = per_type.get(message_type, 0) + 1

    def increment_connection_rejection(self, limit_type: str) -> None:
        """
        Increment connection rejection counter.

        Args:
            limit_type: Type of limit that caused rejection (global, per_user)
        """
        self.stats["connection_rejections"] += 1
        by_type = self.stats["connection_rejections_by_type"]
        by_type[limit_type] = by_type.get(limit_type, 0) + 1

    def get_uptime_seconds(self) -> float:
        return (datetime.utcnow() - self.stats["start_time"]).total_seconds()
