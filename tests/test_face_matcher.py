import numpy as np
import pytest

from app.errors import ValidationError
from app.models import FaceMatcher, LabeledDescriptors, UNKNOWN_LABEL


def test_best_match_uses_mean_distance_per_label():
    matcher = FaceMatcher([
        LabeledDescriptors('S1', 'Alice', [[0.0, 0.0], [0.0, 0.4]]),
        LabeledDescriptors('S2', 'Bob', [[0.3, 0.0]]),
    ])
    # Alice: trung bình (0.0 + 0.4) / 2 = 0.2; Bob: 0.3
    result = matcher.find_best_match([0.0, 0.0])
    assert result['label'] == 'Alice'
    assert result['distance'] == pytest.approx(0.2)
    assert result['confidence'] == pytest.approx(80.0)


def test_threshold_is_exclusive():
    matcher = FaceMatcher([LabeledDescriptors('S1', 'Alice', [[0.0]])], threshold=0.5)
    assert matcher.find_best_match([0.5])['label'] == UNKNOWN_LABEL
    assert matcher.find_best_match([0.49])['label'] == 'Alice'


def test_from_rows_groups_by_student_and_skips_other_dimensions():
    rows = [
        {'student_id': 'S1', 'descriptor': [0.0, 0.0], 'students': {'name': 'Alice'}},
        {'student_id': 'S1', 'descriptor': {'0': 0.0, '1': 0.2}, 'students': {'name': 'Alice'}},
        {'student_id': 'S2', 'descriptor': [1.0, 1.0], 'students': None},
        {'student_id': 'S3', 'descriptor': [1.0, 1.0, 1.0], 'students': {'name': 'Carol'}},
        {'student_id': 'S4', 'descriptor': []},
    ]
    matcher = FaceMatcher.from_rows(rows)
    assert len(matcher) == 2
    labels = {item.student_id: item.label for item in matcher.labeled}
    assert labels == {'S1': 'Alice', 'S2': 'S2'}
    assert matcher.labeled[0].descriptors.dtype == np.float32


def test_dimension_mismatch_raises():
    matcher = FaceMatcher([LabeledDescriptors('S1', 'Alice', [[0.0, 0.0]])])
    with pytest.raises(ValidationError):
        matcher.find_best_match([0.0, 0.0, 0.0])
