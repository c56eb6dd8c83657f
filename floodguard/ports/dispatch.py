"""
Alert dispatch port interface.

This module defines the protocol for handing a risk assessment
to the external notification (e-mail) service.
"""

from typing import Protocol
from floodguard.core.models import Recipient, RiskAssessment, Coordinate

class AlertDispatchPort(Protocol):
    """경보 발송 포트 인터페이스"""
    
    async def send_flood_alert(self, recipient: Recipient,
                               assessment: RiskAssessment,
                               location: Coordinate) -> None:
        """
        홍수 경보를 발송합니다.
        
        Args:
            recipient: 수신자
            assessment: 위험 평가 결과
            location: 평가한 위치
        """
        ...
