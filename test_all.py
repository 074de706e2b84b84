'''
this script checks all python scripts in src directory
it runs every script, detects pass/failure based on return code, and report that
test_all() also fails when collected by pytest and any script failed
'''

import os
import sys
import glob
import subprocess


def run_all():
    all_fpaths = glob.glob(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src/*.py'))
    all_fpaths.sort()

    failed = []
    for fpath in all_fpaths:
        completed = subprocess.run(
            [sys.executable, fpath], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        retcode = completed.returncode
        status = 'PASSED' if retcode == 0 else 'FAILED (%d)' % retcode
        bname = os.path.basename(fpath)
        print('%s: %s' % (bname, status))
        if retcode != 0:
            failed.append(bname)
    return all_fpaths, failed


def test_all():
    all_fpaths, failed = run_all()
    assert len(all_fpaths) > 0
    assert failed == [], 'failed scripts: %s' % ', '.join(failed)


if __name__ == '__main__':
    _, failed = run_all()
    sys.exit(1 if failed else 0)
