import os
import stat
import tempfile


def target_mode(path):
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        # New files get the usual default, not mkstemp's owner-only mode
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_file(path, data):
    # Write next to the target and swap it in, so a failure never leaves a
    # truncated or half-patched file behind
    path = os.path.abspath(path)
    mode = target_mode(path)
    fd, tmp_path = tempfile.mkstemp(
        dir=os.path.dirname(path), prefix='.%s.' % os.path.basename(path), suffix='.tmp')
    try:
        with os.fdopen(fd, 'wb') as fp:
            fp.write(data)
            fp.flush()
            os.fsync(fp.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise
