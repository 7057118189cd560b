"""NPC 시뮬레이션 Core — DB/서비스 무관 순수 도메인 로직"""
__version__ = "0.1.0"
