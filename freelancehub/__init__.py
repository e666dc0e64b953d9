"""FreelanceHub: 클라이언트 프로젝트 진행 현황 추적 백엔드."""

__version__ = "0.1.0"
