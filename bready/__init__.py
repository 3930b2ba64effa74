"""
B-Ready 평가 채점

- core: 설정/로깅/예외/DB 공통 인프라
- scoring: FFP/SBP 채점 엔진
- assessment: 평가 워크플로우 (답변 저장, 점수 확정)
"""
__version__ = "0.1.0"
