from __future__ import annotations

import argparse
import logging
import sys

from .env import configure_logging, load_dotenv_if_present
from .config import SfxCueConfig
from .cues import render_cue_lines, write_cue_sheet
from .pipeline import SfxCuePipeline

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfxcue",
        description="sfxcue: 转录音频，生成音效提示，并将提示短语映射到转录时间戳。",
    )
    parser.add_argument(
        "input",
        type=str,
        help="音频 URL / 本地音频路径；使用 --asr-backend json 时为 verbose_json 转录文件路径。",
    )
    parser.add_argument(
        "--asr-backend",
        type=str,
        choices=["openai", "json"],
        default=None,
        help="转录来源：openai（在线转录接口）/ json（已保存的转录文件）。默认读取 SFXCUE_ASR_BACKEND。",
    )
    parser.add_argument(
        "--output-json",
        type=str,
        default=None,
        help="将映射后的音效提示写入 JSON 文件。",
    )
    parser.add_argument(
        "--synthesize",
        type=str,
        default=None,
        metavar="DIR",
        help="为每条音效提示合成音频并写入指定目录（需要 SFXCUE_SOUND_API_KEY）。",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="日志级别（默认 INFO，可通过环境变量 SFXCUE_LOG_LEVEL 配置）。",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    # 确保在解析参数和使用配置之前加载 .env 中的环境变量
    load_dotenv_if_present()
    if argv is None:
        argv = sys.argv[1:]

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = SfxCueConfig.from_env(
            asr_backend=args.asr_backend,
            log_level=args.log_level.upper() if args.log_level else None,
        )
        configure_logging(config.log_level)

        pipeline = SfxCuePipeline(config)
        transcript, cues = pipeline.run(args.input)
        if args.synthesize:
            cues = pipeline.run_synthesis(cues, output_dir=args.synthesize)

        print("音效提示生成完成")
        print(f"   输入: {args.input}")
        print(f"   词数: {len(transcript.words)}")
        found = sum(1 for cue in cues if cue.timestamp is not None)
        print(f"   提示数: {len(cues)}（已定位 {found}）")
        for line in render_cue_lines(cues):
            print(line)
        if args.output_json:
            out_path = write_cue_sheet(cues, args.output_json)
            print(f"   输出: {out_path}")
        return 0
    except KeyboardInterrupt:
        print("\n用户中断")
        return 1
    except Exception as exc:
        logger.debug("Pipeline failed", exc_info=True)
        print(f"处理失败: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
