"""
Webhook alert dispatcher for FloodGuard.

This module posts flood alerts as JSON to an external notification
service (which owns the e-mail template and delivery).
"""

import asyncio
import aiohttp
from typing import Any, Dict, Optional
from floodguard.common.retry import retry_with_backoff
from floodguard.core.models import Coordinate, Recipient, RiskAssessment
from floodguard.core.risk import risk_color
from floodguard.errors import DispatchError
from floodguard.observability.logging_setup import get_logger

log = get_logger("floodguard.dispatch")

def alert_payload(recipient: Recipient, assessment: RiskAssessment,
                  location: Coordinate) -> Dict[str, Any]:
    """외부 알림 서비스로 보낼 JSON 본문을 만듭니다."""
    return {
        "to": recipient.email,
        "subject": f"FloodGuard Alert: {assessment.risk_level.value} Flood Risk Detected",
        "riskAssessment": assessment.model_dump(mode="json", by_alias=True),
        "riskColor": risk_color(assessment.risk_level),
        "location": location.model_dump(mode="json"),
    }

class WebhookAlertDispatcher:
    """웹훅 기반 경보 발송기"""
    
    def __init__(self,
                 url: str,
                 timeout: int = 5,
                 *,
                 max_retries: int = 3,
                 backoff_initial: float = 0.5,
                 backoff_max: float = 10.0):
        """
        초기화합니다.
        
        Args:
            url: 알림 서비스 웹훅 URL
            timeout: 요청 타임아웃 (초)
            max_retries: 최대 재시도 횟수
            backoff_initial: 초기 백오프 (초)
            backoff_max: 최대 백오프 (초)
        """
        self.url = url
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_initial = backoff_initial
        self.backoff_max = backoff_max
        self.session: Optional[aiohttp.ClientSession] = None
        
        log.info(f"웹훅 경보 발송기 초기화됨 url:{url}")
    
    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        self.session = aiohttp.ClientSession(
            headers={"Content-Type": "application/json"},
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.close()
    
    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None
    
    async def send_flood_alert(self, recipient: Recipient,
                               assessment: RiskAssessment,
                               location: Coordinate) -> None:
        """
        홍수 경보를 웹훅으로 발송합니다.
        
        Raises:
            DispatchError: 재시도 후에도 실패했을 때
        """
        if self.session is None:
            await self.__aenter__()
        
        payload = alert_payload(recipient, assessment, location)
        
        async def _post():
            async with self.session.post(self.url, json=payload) as response:
                response.raise_for_status()
        
        try:
            await retry_with_backoff(
                _post,
                max_retries=self.max_retries,
                base_delay=self.backoff_initial,
                max_delay=self.backoff_max,
                retry_on=(aiohttp.ClientError, asyncio.TimeoutError),
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DispatchError(f"webhook dispatch failed: {e}") from e
        
        log.info(f"경보 발송 완료 user:{recipient.id} level:{assessment.risk_level.value}")

class LogAlertDispatcher:
    """웹훅이 설정되지 않았을 때 로그만 남기는 발송기"""
    
    def __init__(self):
        self.sent = 0
    
    async def send_flood_alert(self, recipient: Recipient,
                               assessment: RiskAssessment,
                               location: Coordinate) -> None:
        self.sent += 1
        log.warning(f"알림 서비스 미설정, 경보 발송 건너뜀 user:{recipient.id} "
                    f"level:{assessment.risk_level.value} "
                    f"lat:{location.latitude} lon:{location.longitude}")
