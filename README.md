# pipex

pipex runs commands joined by pipes. The first command reads from an input
file and the last command writes to an output file. The result matches a
shell redirection, but no shell is started: each command is split into words
by pipex itself and run directly.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install .[test]
```

## Two commands

```
pipex infile "cmd1" "cmd2" outfile
```

This does the same as:

```
< infile cmd1 | cmd2 > outfile
```

Example:

```
pipex infile.txt "grep Lorem" "wc -l" outfile.txt
```

The output file is created if it is missing and emptied if it already exists
(mode `0644`). If the input file cannot be opened, pipex prints
`pipex: No such file or directory: <infile>`, does not run the first command,
creates an empty output file, and still runs the second command with an empty
input. The exit status is that of the second command.

With a number of arguments other than four, pipex prints a usage message and
exits with status 1.

## Any number of commands

```
pipex-bonus infile "cmd1" "cmd2" ... "cmdn" outfile
```

This does the same as:

```
< infile cmd1 | cmd2 | ... | cmdn > outfile
```

If the input file cannot be opened, pipex-bonus prints
`pipex: no such file or directory: <infile>` and exits with status 0 without
running any command or touching the output file.

With fewer than four arguments, pipex-bonus prints a usage message and exits
with status 0.

## Here-document mode

```
pipex-bonus here_doc LIMITER "cmd1" "cmd2" ... outfile
```

This does the same as:

```
cmd1 << LIMITER | cmd2 | ... >> outfile
```

pipex shows the prompt `heredoc> ` on standard output and reads lines from
standard input. It stops at end of input or at the first line that is exactly
`LIMITER`. The lines read before it become the input of the first command. The
output is appended to `outfile`, which is created if missing.

Here-document mode is chosen when the first argument starts with `here_doc`.
It needs at least two commands; otherwise a usage message is printed and the
exit status is 0.

## How commands are split into words

Each command string is split on unquoted whitespace. Text inside single or
double quotes stays in one word, and one pair of matching quotes around a
whole word is removed. A backslash keeps the next character in the current
word; `\"` becomes a plain `"`, other backslashes are kept as written.

Examples:

- `"tr '[:upper:]' '[:lower:]'"` is split into `tr`, `[:upper:]`, `[:lower:]`.
- `awk '{print $1}'` is split into `awk` and `{print $1}`.
- A single quoted word that begins with `awk `, such as `"awk '{print $1}'"`,
  is split again into `awk` and its program.

## Finding the executable

In `pipex`, a command name that contains `/` is run from that path: a missing
file gives status 127, a file that is not executable gives 126. Any other name
is looked up in the directories of `PATH`; if the environment has no `PATH`,
`/bin:/usr/bin:/usr/local/bin` is searched.

In `pipex-bonus`, a name containing `/` that is not an executable file gives
status 126. Other names are looked up in `PATH`; if there is no `PATH`, or the
name is in none of its directories, the status is 127.

## Exit status

pipex exits with the status of the last command.

- A command that cannot be found or parsed gives 127.
- A file that exists but cannot be executed gives 126.
- A command killed by a signal gives 128 plus the signal number.
- In `pipex-bonus`, if the input file was missing and the last command
  succeeded, the status is 1.

Error messages go to standard error, prefixed with `pipex: `.

## What pipex does not do

pipex is not a shell. It does no variable expansion, globbing, command
substitution, or redirection inside a command string, and it does not start
`sh` to run commands.

## Using it from Python

The entry points `pipex.cli.main` and `pipex.cli.main_bonus` can be called
directly. Pass the argument list the way it appears on the command line,
starting with the program name. The return value is the exit status.

```python
from pipex.cli import main

status = main(["pipex", "infile.txt", "tr a-z A-Z", "sort", "result.txt"])
```

To split a command string into words:

```python
from pipex.tokenizer import shell_split

shell_split("grep 'hello world'")   # ['grep', 'hello world']
```

To find the executable for a command string:

```python
from pipex.pathsearch import resolve_command

command = resolve_command("ls -l", {"PATH": "/bin:/usr/bin"})
command.path   # e.g. '/bin/ls'
command.argv   # ['ls', '-l']
```

Failures are raised as `pipex.errors.PipexError` and its subclasses
`CommandNotFoundError` (status 127) and `PermissionDeniedError` (status 126);
each carries the exit status in its `code` attribute.