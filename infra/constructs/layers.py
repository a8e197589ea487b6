import logging
import subprocess
from pathlib import Path

import jsii
from aws_cdk import BundlingOptions, ILocalBundling
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

logger = logging.getLogger(__name__)

LAYER_SOURCE_PATH = "layers/dependencies"


@jsii.implements(ILocalBundling)
class PythonLocalBundling:
    """ローカル環境で依存ライブラリをインストールする Bundling クラス

    uv、pip の順に試し、どちらも使えない場合は Docker でのバンドリングに任せる。
    """

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path

    def try_bundle(self, output_dir: str, options: BundlingOptions) -> bool:
        del options  # unused
        requirements_path = Path(self.source_path) / "requirements.txt"
        if not requirements_path.exists():
            logger.warning("requirements.txt not found: %s", requirements_path)
            return False

        target_dir = str(Path(output_dir) / "python")
        installers = [
            ["uv", "pip", "install", "-r", str(requirements_path), "--target", target_dir],
            ["pip", "install", "-r", str(requirements_path), "-t", target_dir],
        ]
        for command in installers:
            if self._run(command):
                return True

        logger.warning("Local bundling failed, falling back to Docker")
        return False

    @staticmethod
    def _run(command: list[str]) -> bool:
        try:
            subprocess.run([*command, "--quiet"], check=True)
        except FileNotFoundError:
            logger.debug("%s not found", command[0])
            return False
        except subprocess.CalledProcessError as e:
            logger.debug("%s install failed: %s", command[0], e)
            return False
        logger.info("Local bundling with %s succeeded", command[0])
        return True


class Layers(Construct):
    """Lambda Layers Construct（pydantic などの依存ライブラリ）"""

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        self.dependencies_layer = _lambda.LayerVersion(
            self,
            "DependenciesLayer",
            code=_lambda.Code.from_asset(
                LAYER_SOURCE_PATH,
                bundling=BundlingOptions(
                    image=_lambda.Runtime.PYTHON_3_14.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install -r requirements.txt -t /asset-output/python",
                    ],
                    local=PythonLocalBundling(LAYER_SOURCE_PATH),
                ),
            ),
            compatible_runtimes=[_lambda.Runtime.PYTHON_3_14],
            description="Flight booking dependencies",
        )
