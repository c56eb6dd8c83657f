"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import os
import tempfile
import pytest
from unittest.mock import AsyncMock
from floodguard.adapters.storage.memory_store import InMemoryFloodStore
from floodguard.core.models import Recipient
from floodguard.features.flood_service import FloodService
from floodguard.settings import Settings




@pytest.fixture
def temp_db_path():
    """임시 데이터베이스 파일 경로"""
    with tempfile.NamedTemporaryFile(suffix='.db', delete=False) as f:
        temp_path = f.name
    yield temp_path
    # 테스트 후 파일 정리
    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    return settings


@pytest.fixture
def empty_store():
    """시드 없는 메모리 저장소"""
    return InMemoryFloodStore(seed_data=False)


@pytest.fixture
def seeded_store():
    """시드 데이터가 있는 메모리 저장소"""
    return InMemoryFloodStore(seed_data=True)


@pytest.fixture
def mock_dispatcher():
    """테스트용 경보 발송기"""
    return AsyncMock()


@pytest.fixture
def service(seeded_store, mock_dispatcher, sample_settings):
    """시드 저장소 위의 FloodService"""
    return FloodService(seeded_store, mock_dispatcher, sample_settings)


@pytest.fixture
def recipient():
    """경보 수신 동의한 사용자"""
    return Recipient(id=1, email="user@example.com", receive_alerts=True)
