"""
웹 서버 실행 스크립트
백엔드 API 서버를 시작합니다.
"""

import os
import sys

import uvicorn


def main():
    web_dir = os.path.dirname(os.path.abspath(__file__))
    project_dir = os.path.dirname(web_dir)
    sys.path.insert(0, project_dir)

    print("=" * 60)
    print("  우선순위 + 라운드 로빈 스케줄러 시뮬레이터 - 웹 서버")
    print("=" * 60)
    print()
    print("백엔드 서버를 시작합니다...")
    print("API 문서: http://localhost:8000/docs")
    print()
    print("종료하려면 Ctrl+C를 누르세요.")
    print("-" * 60)

    uvicorn.run("web.backend.app:app", host="0.0.0.0", port=8000,
                reload=True, app_dir=project_dir)


if __name__ == "__main__":
    main()
