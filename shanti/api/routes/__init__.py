"""
API Routes Package
==================
- routes/guide.py: 가이드 응답 (/api/guide/respond)
- routes/community.py: 커뮤니티 스토리 검사 (/api/community/screen)
- routes/health.py: 헬스체크 (/health)
"""
