import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from shanti.infrastructure.container import Container
from shanti.monitoring.logger import AgentLogger


def pytest_configure(config):
    """테스트 시작 전 환경 설정 로드"""
    project_root = Path(__file__).parent.parent

    env_file = os.environ.get("ENV_FILE", ".env.test")
    env_path = project_root / env_file

    if env_path.exists():
        load_dotenv(env_path, override=True)
        print(f"[conftest] Applied test overrides from: {env_path}")


@pytest.fixture(autouse=True)
def isolate_singletons():
    """컨테이너와 로거 싱글톤을 테스트마다 초기화"""
    Container.reset()
    AgentLogger._instances.clear()
    yield
    Container.reset()
    AgentLogger._instances.clear()


@pytest.fixture
def test_logger(tmp_path):
    return AgentLogger("test_guide", log_dir=str(tmp_path / "logs"))


@pytest.fixture
def data_dir(tmp_path):
    """4개 소스 CSV가 들어 있는 임시 데이터 디렉토리"""
    directory = tmp_path / "data"
    directory.mkdir()

    (directory / "Bhagwad_Gita.csv").write_text(
        "Chapter,Verse,Shloka,EngMeaning\n"
        '2,47,"karmanye vadhikaraste","You have a right to perform your duty, but not to the fruits of action."\n'
        '6,35,"asanshayam maha-baho","The restless mind is difficult to control, but practice brings calm."\n',
        encoding="utf-8",
    )
    (directory / "Mental_Health_FAQ.csv").write_text(
        "Question_ID,Questions,Answers\n"
        '1,What are signs of anxiety?,"Persistent worry, restlessness and anxious thoughts before sleep."\n',
        encoding="utf-8",
    )
    (directory / "mental_health.csv").write_text(
        "text,label\n"
        '"I feel anxious every night before exams",1\n'
        '"Walking each morning calms me",0\n',
        encoding="utf-8",
    )
    (directory / "Student Mental health.csv").write_text(
        "Choose your gender,What is your course?,Your current year of Study,"
        "Do you have Depression?,Do you have Anxiety?,Do you have Panic attack?,"
        "Did you seek any specialist for a treatment?\n"
        "Female,Engineering,1,Yes,No,Yes,No\n",
        encoding="utf-8",
    )
    return directory
