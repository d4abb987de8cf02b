"""Shared test fixtures for artie-lens tests."""

import json
from pathlib import Path

import pytest

from artie_lens.config import DEFAULT_CONFIG, LensConfig

TSCONFIG = """{
  // compiler options used by the program model
  "compilerOptions": {
    "target": "ES2020",
    "strict": true,
  },
}
"""

SERVICE_TS = """\
import { Repository } from './repository'
import { Logger as AppLogger } from './logger'

export interface Clock {
  now(): Date
}

export class UserService extends BaseService implements Clock {
  private cache = new Map<string, string>()
  private retries = 3

  constructor(private repo: Repository, private logger: AppLogger, name: string) {
    super()
  }

  now(): Date {
    return new Date()
  }

  find(id: string) {
    if (this.cache.has(id)) {
      return this.cache.get(id)
    }
    return this.repo.load(id)
  }

  count() {
    return this.cache.size
  }
}
"""

REPOSITORY_TS = """\
export class Repository {
  load(id: string): string {
    return id
  }
}
"""

LOGGER_TS = """\
export class Logger {
  info(message: string) {
    console.log(message)
  }
}
"""


@pytest.fixture
def write_files(tmp_path):
    """Write a mapping of relative path -> content under tmp_path."""

    def _write(files: dict[str, str], root: Path = tmp_path) -> Path:
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def sample_project(write_files):
    """A small TypeScript project with a tsconfig and three classes."""
    return write_files(
        {
            "tsconfig.json": TSCONFIG,
            "src/service.ts": SERVICE_TS,
            "src/repository.ts": REPOSITORY_TS,
            "src/logger.ts": LOGGER_TS,
            "src/types.d.ts": "declare class Ambient {}\n",
            "src/service.test.ts": "function testIt() {}\n",
            "node_modules/lib/index.ts": "export class Vendored {}\n",
        }
    )


@pytest.fixture
def default_config():
    return LensConfig.from_dict(DEFAULT_CONFIG)


@pytest.fixture
def config_file(tmp_path):
    """Write a config dict as .artierc.json and return its path."""

    def _write(data: dict = DEFAULT_CONFIG, name: str = ".artierc.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
