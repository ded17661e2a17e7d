"""CLI Utilities Module

헤더 출력, 대화형 UI, 템플릿 엔진, 이름 검증 유틸리티를 제공합니다.
"""
