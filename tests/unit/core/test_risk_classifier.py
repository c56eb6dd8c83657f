"""
위험 분류 규칙표 테스트

hypothesis로 규칙표의 속성을 함께 검사합니다.
"""

import pytest
from hypothesis import given, strategies as st
from floodguard.core.models import RiskLevel
from floodguard.core.risk import (
    classify_risk, resolve_threshold, river_name_for, risk_color, UNKNOWN_RIVER,
)
from factories import make_reading

levels = st.floats(min_value=-100, max_value=500, allow_nan=False)
distances = st.floats(min_value=0, max_value=50, allow_nan=False)


class TestRuleTable:
    """규칙표 고정 사례"""

    def test_above_threshold_is_high(self):
        assert classify_risk(90, 80, 1.0) == RiskLevel.HIGH

    def test_far_above_threshold_is_high(self):
        """+5 여유 구간과 일반 구간은 같은 결과"""
        assert classify_risk(86, 80, 1.0) == RiskLevel.HIGH
        assert classify_risk(80, 80, 1.0) == RiskLevel.HIGH

    def test_within_five_below_threshold_is_medium(self):
        assert classify_risk(76, 80, 1.0) == RiskLevel.MEDIUM
        assert classify_risk(75, 80, 1.0) == RiskLevel.MEDIUM

    def test_close_to_river_is_medium(self):
        assert classify_risk(50, 80, 0.3) == RiskLevel.MEDIUM

    def test_otherwise_low(self):
        assert classify_risk(50, 80, 2.0) == RiskLevel.LOW

    def test_exactly_half_km_is_not_close(self):
        assert classify_risk(50, 80, 0.5) == RiskLevel.LOW


class TestDistanceOverride:
    """거리 오버라이드 테스트"""

    def test_override_beats_water_level(self):
        assert classify_risk(200, 80, 6.0, distance_override_km=5.0) == RiskLevel.LOW

    def test_override_disabled_keeps_table(self):
        assert classify_risk(200, 80, 6.0, distance_override_km=None) == RiskLevel.HIGH

    def test_override_boundary_is_exclusive(self):
        assert classify_risk(200, 80, 5.0, distance_override_km=5.0) == RiskLevel.HIGH

    @given(level=levels, threshold=levels,
           distance=st.floats(min_value=5.0001, max_value=50, allow_nan=False))
    def test_beyond_override_always_low(self, level, threshold, distance):
        assert classify_risk(level, threshold, distance, distance_override_km=5.0) == RiskLevel.LOW


class TestRuleProperties:
    """규칙표 속성 테스트"""

    @given(level=levels, threshold=levels, distance=distances)
    def test_result_is_closed_enum(self, level, threshold, distance):
        assert classify_risk(level, threshold, distance) in set(RiskLevel)

    @given(level=levels, threshold=levels, distance=distances)
    def test_high_iff_at_or_above_threshold(self, level, threshold, distance):
        result = classify_risk(level, threshold, distance)
        assert (result == RiskLevel.HIGH) == (level >= threshold)

    @given(level=levels, threshold=levels, distance=distances)
    def test_deterministic(self, level, threshold, distance):
        assert classify_risk(level, threshold, distance) == classify_risk(level, threshold, distance)


class TestThresholdAndNames:
    """임계 수위 기본값과 하천 이름"""

    def test_explicit_threshold_used(self):
        assert resolve_threshold(make_reading(1, 0, 0, 70.0, 80.0)) == 80.0

    def test_missing_threshold_defaults_to_level_minus_five(self):
        assert resolve_threshold(make_reading(1, 0, 0, 70.0, None)) == 65.0

    def test_zero_threshold_is_kept(self):
        """0은 누락이 아니라 실제 값"""
        assert resolve_threshold(make_reading(1, 0, 0, 70.0, 0.0)) == 0.0

    @pytest.mark.parametrize("lat,lon,name", [
        (17.385044, 78.486671, "Musi River"),
        (18.52, 73.86, "Mula River"),
        (19.07, 72.88, "Mithi River"),
        (12.97, 77.59, "Vrishabhavathi River"),
    ])
    def test_river_name_by_nearest_reference(self, lat, lon, name):
        assert river_name_for(lat, lon) == name

    def test_river_name_never_unknown(self):
        """기준점이 있으므로 어느 좌표든 이름이 정해짐"""
        assert river_name_for(-45.0, -120.0) != UNKNOWN_RIVER

    def test_risk_color(self):
        assert risk_color(RiskLevel.HIGH) == "red"
        assert risk_color("LOW") == "green"
        assert risk_color("UNKNOWN") == "gray"
