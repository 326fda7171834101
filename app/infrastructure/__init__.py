"""Infrastructure modules for the Business Admin notification service.

Centralized infrastructure components:
- configuration: Settings management (Settings, AwsSettings, NotificationSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- models: Shared API response models (ErrorResponse)
- notifications: Multi-channel notification dispatcher
- operations: Operation results and error classification
- persistence: Document store over DynamoDB
- services: Dependency injection services (SettingsDep, NotificationServiceDep, get_settings)
"""

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
