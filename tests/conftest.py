import os
import tempfile

# ログ出力先 (TimedRotatingFileHandler) をテスト用の一時ディレクトリに向ける
os.environ.setdefault("TODOTASK_HOME_DIR", tempfile.mkdtemp(prefix="todotask-test-"))
