from workflow_builder.domain.workflow.entities.workflow import Workflow
from workflow_builder.domain.workflow.services.identifiers import IdFactory, new_node_id
from workflow_builder.domain.workflow.services.node_store import DEFAULT_NODE_LABEL, add_node
from workflow_builder.domain.workflow.value_objects.node_type import NodeType
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)


class AddNodeUseCase:
    def __init__(
        self,
        session_repository: ISessionRepository,
        node_label: str = DEFAULT_NODE_LABEL,
        id_factory: IdFactory = new_node_id,
    ):
        self._session_repository = session_repository
        self._node_label = node_label
        self._id_factory = id_factory

    def execute(
        self,
        session_id: str,
        parent_id: str,
        node_type: NodeType | str,
        slot_index: int | None = None,
    ) -> tuple[str, Workflow]:
        """
        Attaches a new node under ``parent_id`` and commits the result.

        A failed insertion raises before anything is committed, leaving the
        session's history untouched.

        Returns:
            tuple containing (node_id, new present workflow).
        """
        session = self._session_repository.get_or_raise(session_id)
        before = session.present

        workflow = add_node(
            before,
            parent_id,
            node_type,
            slot_index,
            label=self._node_label,
            id_factory=self._id_factory,
        )
        (node_id,) = set(workflow.nodes) - set(before.nodes)
        displaced = set(before.nodes) - set(workflow.nodes)

        session.apply(workflow)
        self._session_repository.save(session)

        logger.info(
            "node_added",
            session_id=session_id,
            node_id=node_id,
            parent_id=parent_id,
            node_type=workflow.get(node_id).type.value,
            slot_index=slot_index,
        )
        if displaced:
            logger.warning(
                "displaced_subtree_removed",
                session_id=session_id,
                parent_id=parent_id,
                removed_ids=sorted(displaced),
            )
        return node_id, workflow
