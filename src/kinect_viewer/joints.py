"""
Joint filtering - selects the joints that are rendered and logged.
"""

from typing import Dict, List, Mapping, Tuple

from .models import Joint, JointType
from .constants import BONES, LOWER_BODY_JOINTS


def is_rendered_joint(joint_type: JointType) -> bool:
    """하체 관절이 아니면 True"""
    return joint_type not in LOWER_BODY_JOINTS


def filter_joints(joints: Mapping[JointType, Joint]) -> Dict[JointType, Joint]:
    """렌더링/로그 대상 관절만 JointType 순서대로 반환"""
    return {
        joint_type: joints[joint_type]
        for joint_type in sorted(joints)
        if is_rendered_joint(joint_type)
    }


def rendered_bones() -> List[Tuple[JointType, JointType]]:
    """양 끝 관절이 모두 필터를 통과하는 뼈대"""
    return [
        (joint0, joint1) for joint0, joint1 in BONES
        if is_rendered_joint(joint0) and is_rendered_joint(joint1)
    ]
