"""프로젝트 수준 협력 객체: 설정, 조회, 파일 작성, 레이아웃, 생성기"""
