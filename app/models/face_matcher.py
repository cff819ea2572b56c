"""
Face Matcher - So khớp descriptor với dữ liệu đã huấn luyện
Cùng ngữ nghĩa với FaceMatcher của face-api: khoảng cách Euclid trung bình theo từng nhãn
"""
from collections import Counter

import numpy as np
from typing import Any, Dict, Iterable, List, Optional

from app.errors import ValidationError

UNKNOWN_LABEL = 'unknown'


class LabeledDescriptors:
    """Tập descriptor của một sinh viên"""

    def __init__(self, student_id, label, descriptors):
        self.student_id = student_id
        self.label = label
        self.descriptors = np.asarray(descriptors, dtype=np.float32)


class FaceMatcher:
    """Tìm sinh viên gần nhất cho một descriptor"""

    def __init__(self, labeled: List[LabeledDescriptors], threshold: float = 0.6):
        self.labeled = labeled
        self.threshold = threshold
        self.dimension = labeled[0].descriptors.shape[1] if labeled else None

    @classmethod
    def from_rows(cls, rows: Iterable[Dict[str, Any]], threshold: float = 0.6) -> 'FaceMatcher':
        """Nhóm các dòng face_descriptors (kèm students) theo student_id."""
        rows = [dict(row, descriptor=_as_vector(row.get('descriptor'))) for row in rows]
        rows = [row for row in rows if row['descriptor']]
        if not rows:
            return cls([], threshold=threshold)

        # Chỉ giữ descriptor có độ dài phổ biến nhất (cùng một model)
        lengths = Counter(len(row['descriptor']) for row in rows)
        dimension = lengths.most_common(1)[0][0]

        grouped = {}
        for row in rows:
            if len(row['descriptor']) != dimension:
                continue
            student_id = row.get('student_id')
            owner = row.get('students') or {}
            entry = grouped.setdefault(student_id, {
                'label': owner.get('name') or str(student_id),
                'descriptors': [],
            })
            entry['descriptors'].append(row['descriptor'])

        labeled = [
            LabeledDescriptors(student_id, entry['label'], entry['descriptors'])
            for student_id, entry in grouped.items()
        ]
        return cls(labeled, threshold=threshold)

    def __len__(self):
        return len(self.labeled)

    def find_best_match(self, descriptor) -> Dict[str, Optional[Any]]:
        query = np.asarray(descriptor, dtype=np.float32)
        if not self.labeled:
            return {'label': UNKNOWN_LABEL, 'student_id': None, 'distance': None, 'confidence': None}
        if query.ndim != 1 or query.shape[0] != self.dimension:
            raise ValidationError(
                f'descriptor must have {self.dimension} values, got {query.size}'
            )

        best = None
        best_distance = None
        for item in self.labeled:
            distance = float(np.mean(np.linalg.norm(item.descriptors - query, axis=1)))
            if best_distance is None or distance < best_distance:
                best, best_distance = item, distance

        if best_distance < self.threshold:
            return {
                'label': best.label,
                'student_id': best.student_id,
                'distance': round(best_distance, 4),
                'confidence': round((1 - best_distance) * 100, 2),
            }
        return {
            'label': UNKNOWN_LABEL,
            'student_id': None,
            'distance': round(best_distance, 4),
            'confidence': None,
        }


def _as_vector(value):
    # Float32Array từ trình duyệt có thể được lưu dạng {"0": .., "1": ..}
    if isinstance(value, dict):
        return [value[key] for key in sorted(value, key=int)]
    return list(value or [])
