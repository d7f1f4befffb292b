from datetime import datetime, timezone

import pytest
from kubernetes.client import (
    V1ContainerState,
    V1ContainerStateRunning,
    V1ContainerStateTerminated,
    V1ContainerStateWaiting,
    V1ContainerStatus,
    V1ObjectMeta,
    V1Pod,
    V1PodCondition,
    V1PodStatus,
)

STARTED = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)


def _container_status(
    name="app",
    image="registry.example.com/app:1.0",
    restart_count=0,
    ready=True,
    waiting=None,
    waiting_message=None,
    last_terminated=None,
    last_exit_code=1,
    terminated=None,
):
    state = V1ContainerState(running=V1ContainerStateRunning(started_at=STARTED))
    if waiting:
        state = V1ContainerState(waiting=V1ContainerStateWaiting(reason=waiting, message=waiting_message))
    elif terminated:
        state = V1ContainerState(terminated=V1ContainerStateTerminated(exit_code=137, reason=terminated))

    last_state = V1ContainerState()
    if last_terminated:
        last_state = V1ContainerState(
            terminated=V1ContainerStateTerminated(exit_code=last_exit_code, reason=last_terminated),
        )

    return V1ContainerStatus(
        name=name,
        image=image,
        image_id="",
        ready=ready,
        restart_count=restart_count,
        state=state,
        last_state=last_state,
    )


@pytest.fixture
def container_status():
    return _container_status


@pytest.fixture
def make_pod():
    def _make(
        name="web-0",
        namespace="default",
        labels=None,
        phase="Running",
        containers=None,
        init_containers=None,
        ready=None,
        ready_reason=None,
    ):
        conditions = None
        if ready is not None:
            conditions = [V1PodCondition(
                type="Ready",
                status="True" if ready else "False",
                reason=ready_reason,
                last_transition_time=STARTED,
            )]
        return V1Pod(
            metadata=V1ObjectMeta(name=name, namespace=namespace, labels=labels),
            status=V1PodStatus(
                phase=phase,
                conditions=conditions,
                container_statuses=containers if containers is not None else [_container_status()],
                init_container_statuses=init_containers,
            ),
        )
    return _make
