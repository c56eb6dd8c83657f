"""
Error types for FloodGuard.

The core functions never raise for well-typed inputs; these errors
come from the collaborator layer (stores, dispatch) and propagate.
"""


class FloodGuardError(Exception):
    """FloodGuard 기본 예외"""


class StoreError(FloodGuardError):
    """저장소 접근 실패"""


class NotFoundError(FloodGuardError):
    """요청한 레코드가 없음"""

    def __init__(self, kind: str, ident: int):
        super().__init__(f"{kind} {ident} not found")
        self.kind = kind
        self.ident = ident


class DispatchError(FloodGuardError):
    """경보 발송 실패"""


class ForbiddenError(FloodGuardError):
    """다른 사용자의 레코드 접근"""
