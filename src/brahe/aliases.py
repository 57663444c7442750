from brahe.core.models import Mode

GAP_PATTERN_HELP_TEXT = (
    "Search for gaps in a numbered file sequence instead of comparing.\n"
    "  'IMG_/4:14-155/.JPG' : IMG_0014.JPG .. IMG_0155.JPG\n"
    "  '/0:1-13/.txt'       : 1.txt .. 13.txt\n"
)

DEPTH_HELP_TEXT = (
    "How deep into the directory hierarchy to look.\n"
    "  0  : only immediate files/directories, no traversing\n"
    "  -1 : no limit (default)\n"
)

MODE_FLAGS = {
    "build_db": Mode.BUILD_DATABASE,
    "check_db": Mode.CHECK_DATABASE,
    "delete_dupes": Mode.DEDUPE,
    "find_gaps": Mode.FIND_GAPS,
}

EPILOG_TEXT = """
Examples:
  Verify that a backup holds everything the source has (extra files in the backup are fine)
  %(prog)s /data /mnt/backup1 /mnt/backup2

  Only compare names and structure, two levels deep
  %(prog)s --no-data --depth 2 /data /mnt/backup

  Record every file of /photos into a hash database stored in /archive
  %(prog)s --build-db /photos /archive

  Check a memory card against that database and copy what is new
  %(prog)s --check-db --copy /photos/incoming /archive /media/card

  Move duplicate files in /photos to the trash without asking
  %(prog)s --delete-dupes --trash --force /photos

  List which of IMG_0001.JPG .. IMG_0500.JPG are missing
  %(prog)s --find-gaps 'IMG_/4:1-500/.JPG' /photos/2024
"""
