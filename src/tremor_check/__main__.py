"""Точка входа tremor_check как модуля."""

import argparse
import importlib.util
import json
import sys

from tremor_check.exceptions import SourceUnavailableError
from tremor_check.log import setup_logger

log = setup_logger('main')

REQUIRED_PACKAGES = ['numpy', 'scipy', 'librosa', 'soundfile', 'pydantic_settings']


def check_environment() -> bool:
    """Проверяет наличие необходимых зависимостей."""
    missing = [
        pkg for pkg in REQUIRED_PACKAGES
        if importlib.util.find_spec(pkg) is None
    ]
    if missing:
        log.error('Не установлены основные пакеты: %s', missing)
        return False
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tremor_check',
        description='Извлечение показателей качества голоса и скрининг тремора по записанным фразам.',
    )
    parser.add_argument('paths', nargs='+', help='Пути к аудиофайлам с фразами одного диктора')
    parser.add_argument(
        '--extended', action='store_true',
        help='Добавить вспомогательные метрики (ddp, apq3, apq5, dda, shimmer_db, shimmer_pairwise)',
    )
    parser.add_argument(
        '--nonlinear', action='store_true',
        help='Добавить нелинейные меры (dfa, rpde, d2)',
    )
    parser.add_argument('--json', action='store_true', help='Вывод в формате JSON')
    return parser


def main(argv: list[str] | None = None) -> int:
    """Главная функция запуска из командной строки."""
    args = build_parser().parse_args(argv)

    if not check_environment():
        log.critical('Анализ не запущен из-за ошибок окружения.')
        return 1

    from tremor_check.pipeline import extract_features_from_file
    from tremor_check.screening import assess_phrases

    results = []
    for path in args.paths:
        try:
            results.append(extract_features_from_file(
                path,
                extended=args.extended or None,
                nonlinear=args.nonlinear or None,
            ))
        except SourceUnavailableError as e:
            log.error('Аудио недоступно: %s', e)
            return 1

    assessment = assess_phrases(results)

    if args.json:
        payload = {
            'phrases': [
                {
                    'path': path,
                    'features': result.extended_dict(),
                    'undefined': sorted(result.undefined),
                }
                for path, result in zip(args.paths, results)
            ],
            'assessment': assessment.as_dict(),
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        for path, result in zip(args.paths, results):
            print(f'== {path}')
            for name, value in result.extended_dict().items():
                marker = '' if result.is_defined(name) else '  (нет данных)'
                print(f'{name}: {value:.6f}{marker}')
        print(assessment.summary())

    return 0


if __name__ == '__main__':
    sys.exit(main())
