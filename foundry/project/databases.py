"""
데이터베이스 카탈로그

add db 명령이 지원하는 데이터베이스와 템플릿 렌더링에 쓰는 메타데이터를
불변 테이블로 둡니다. 생성되는 Go 코드의 드라이버 동작은 foundry가 관여하지
않으며, 여기서는 파일 생성과 설정 안내에 필요한 값만 다룹니다.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Tuple

from foundry.project.errors import UnsupportedDatabaseError

DATABASE_DIR = "internal/database"
MIGRATIONS_DIR = "migrations"
ENV_EXAMPLE_FILE = ".env.example"
DOCKER_COMPOSE_FILE = "docker-compose.yml"

# .env.example에 이미 블록이 있는지 판별하는 표식
ENV_BLOCK_MARKER = "# Database Configuration"

# 환경 변수 이름 -> 생성되는 Go Config 필드 이름
ENV_FIELDS: Mapping[str, str] = MappingProxyType(
    {
        "DB_HOST": "Host",
        "DB_PORT": "Port",
        "DB_NAME": "Name",
        "DB_USER": "User",
        "DB_PASSWORD": "Password",
        "DB_SSLMODE": "SSLMode",
        "DB_PATH": "Path",
        "MONGO_URI": "URI",
        "MONGO_DATABASE": "DatabaseName",
    }
)


@dataclass(frozen=True)
class DatabaseSpec:
    """
    데이터베이스 한 종류의 메타데이터.

    Attributes:
        db_type: CLI 인자 이름 (예: postgres)
        title: 표시 이름
        description: 한 줄 설명
        driver: Go 드라이버 이름
        go_packages: go get 대상 패키지
        default_port: 기본 포트 (임베디드 DB는 빈 문자열)
        docker_image: docker-compose 이미지 (없으면 Docker 설정 생략)
        env_vars: .env.example에 추가할 (키, 기본값) 목록
        close_call: main.go 예시에서 defer로 호출할 종료 메서드
    """

    db_type: str
    title: str
    description: str
    driver: str
    go_packages: Tuple[str, ...]
    default_port: str
    docker_image: str
    env_vars: Tuple[Tuple[str, str], ...]
    close_call: str = "Close()"

    @property
    def supports_migrations(self) -> bool:
        # 문서형 DB는 SQL 마이그레이션을 만들지 않는다
        return self.db_type != "mongodb"

    @property
    def supports_docker(self) -> bool:
        return bool(self.docker_image)

    @property
    def template_name(self) -> str:
        return f"database/{self.db_type}.go.j2"


_SPECS = (
    DatabaseSpec(
        db_type="postgres",
        title="PostgreSQL",
        description="PostgreSQL - Advanced open-source relational database",
        driver="pgx",
        go_packages=("github.com/jackc/pgx/v5", "github.com/jackc/pgx/v5/pgxpool"),
        default_port="5432",
        docker_image="postgres:16-alpine",
        env_vars=(
            ("DB_HOST", "localhost"),
            ("DB_PORT", "5432"),
            ("DB_NAME", "myapp"),
            ("DB_USER", "postgres"),
            ("DB_PASSWORD", "postgres"),
            ("DB_SSLMODE", "disable"),
        ),
    ),
    DatabaseSpec(
        db_type="mysql",
        title="MySQL",
        description="MySQL - Popular open-source relational database",
        driver="mysql",
        go_packages=("github.com/go-sql-driver/mysql",),
        default_port="3306",
        docker_image="mysql:8",
        env_vars=(
            ("DB_HOST", "localhost"),
            ("DB_PORT", "3306"),
            ("DB_NAME", "myapp"),
            ("DB_USER", "root"),
            ("DB_PASSWORD", "mysql"),
        ),
    ),
    DatabaseSpec(
        db_type="sqlite",
        title="SQLite",
        description="SQLite - Lightweight embedded database",
        driver="sqlite3",
        go_packages=("github.com/mattn/go-sqlite3",),
        default_port="",
        docker_image="",
        env_vars=(("DB_PATH", "./data/app.db"),),
    ),
    DatabaseSpec(
        db_type="mongodb",
        title="MongoDB",
        description="MongoDB - Document-oriented NoSQL database",
        driver="mongo",
        go_packages=("go.mongodb.org/mongo-driver/mongo",),
        default_port="27017",
        docker_image="mongo:7",
        env_vars=(
            ("MONGO_URI", "mongodb://localhost:27017"),
            ("MONGO_DATABASE", "myapp"),
        ),
        close_call="Disconnect(context.Background())",
    ),
)

DATABASE_CATALOG: Mapping[str, DatabaseSpec] = MappingProxyType({spec.db_type: spec for spec in _SPECS})


def supported_databases() -> List[str]:
    return list(DATABASE_CATALOG)


def get_database(db_type: str) -> DatabaseSpec:
    """
    Raises:
        UnsupportedDatabaseError: 카탈로그에 없는 종류
    """
    spec = DATABASE_CATALOG.get(db_type.lower())
    if spec is None:
        raise UnsupportedDatabaseError(db_type, supported_databases())
    return spec


def env_block(spec: DatabaseSpec) -> str:
    """.env.example에 붙일 설정 블록"""
    lines = [f"{ENV_BLOCK_MARKER} ({spec.title})"]
    lines.extend(f"{key}={value}" for key, value in spec.env_vars)
    return "\n".join(lines) + "\n"


def setup_steps(spec: DatabaseSpec, module_name: str) -> str:
    """생성 후 출력할 설정 절차"""
    go_get = "\n".join(f"     go get {package}" for package in spec.go_packages)
    return (
        f"  1. 의존성 설치:\n{go_get}\n"
        f"  2. 환경 변수 설정: cp {ENV_EXAMPLE_FILE} .env\n"
        f"  3. main.go에서 초기화:\n"
        f'     import "{module_name}/{DATABASE_DIR}"\n'
        f"     db, err := database.NewConnection()\n"
        f"     if err != nil {{\n"
        f'         log.Fatal("Failed to connect to database:", err)\n'
        f"     }}\n"
        f"     defer db.{spec.close_call}"
    )
