from typing import Any, Dict, Optional

class WorkflowException(Exception):
    def __init__(
        self,
        message: str,
        error_code: str = "WORKFLOW_ERROR",
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self.message)

class NodeNotFoundError(WorkflowException):
    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(
            message=f"Node '{node_id}' not found",
            error_code="NODE_NOT_FOUND",
            context={"node_id": node_id}
        )

class CannotDeleteRootError(WorkflowException):
    def __init__(self, root_id: str):
        self.root_id = root_id
        super().__init__(
            message=f"The root node '{root_id}' cannot be deleted",
            error_code="CANNOT_DELETE_ROOT",
            context={"root_id": root_id}
        )

class NoAvailableSlotError(WorkflowException):
    def __init__(self, parent_id: str):
        self.parent_id = parent_id
        super().__init__(
            message=f"Branch '{parent_id}' has no empty slot; pass an explicit slot index to replace one",
            error_code="NO_AVAILABLE_SLOT",
            context={"parent_id": parent_id}
        )

class InvalidSlotError(WorkflowException):
    def __init__(self, parent_id: str, slot_index: int, capacity: int):
        self.parent_id = parent_id
        self.slot_index = slot_index
        super().__init__(
            message=f"Slot {slot_index} is out of range for node '{parent_id}' (capacity {capacity})",
            error_code="INVALID_SLOT",
            context={"parent_id": parent_id, "slot_index": slot_index, "capacity": capacity}
        )

class TerminalNodeError(WorkflowException):
    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(
            message=f"Node '{node_id}' is an end node and cannot have children",
            error_code="TERMINAL_NODE",
            context={"node_id": node_id}
        )

class InvalidNodeTypeError(WorkflowException):
    def __init__(self, node_type: str, details: str):
        self.node_type = node_type
        super().__init__(
            message=f"Invalid node type '{node_type}': {details}",
            error_code="INVALID_NODE_TYPE",
            context={"node_type": node_type, "details": details}
        )

class InvalidFieldError(WorkflowException):
    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            message=f"Field '{field_name}' is not editable; expected 'label' or 'notes'",
            error_code="INVALID_FIELD",
            context={"field": field_name}
        )

class InvalidNodeError(WorkflowException):
    def __init__(self, node_id: str, details: str):
        self.node_id = node_id
        super().__init__(
            message=f"Invalid node '{node_id}': {details}",
            error_code="INVALID_NODE",
            context={"node_id": node_id, "details": details}
        )

class InvalidWorkflowError(WorkflowException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="INVALID_WORKFLOW",
            context=details
        )

class SessionNotFoundError(WorkflowException):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            message=f"Session '{session_id}' not found",
            error_code="SESSION_NOT_FOUND",
            context={"session_id": session_id}
        )

class SnapshotNotFoundError(WorkflowException):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            message=f"No exported workflow named '{name}'",
            error_code="SNAPSHOT_NOT_FOUND",
            context={"name": name}
        )
