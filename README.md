# sshtui

Two small terminal tools built on the hosts listed in your `~/.ssh/config`:

- **`ssh-tui`** shows a menu of your configured hosts and replaces itself
  with an `ssh` session to the one you pick.
- **`scp-tui`** shows the same kind of host menu, then opens a two-pane file
  manager with your local home directory on the left and the remote home
  directory on the right, copying files between them with `scp`.

Both need a POSIX terminal with colour support (they stop with
"Your terminal does not support color" otherwise) and the `ssh` and `scp`
programs on your `PATH`.

## Installation

```
pip install .
```

## Host menu: `ssh-tui`

```
ssh-tui
```

Hosts come from the `Host` lines of `~/.ssh/config`. Comment and blank lines
are ignored, `Host` is matched in any case and may be indented, the `*`
wildcard entry is skipped, and only the first name on each line is used.
Any command-line arguments are ignored. If the file cannot be read or lists
no hosts, a message is printed and nothing else happens.

| Key           | Action        |
|---------------|---------------|
| Up / Ctrl+Q   | Previous host |
| Down / Ctrl+S | Next host     |
| Enter         | Connect       |
| q             | Quit          |

The selection wraps around at both ends.

## File manager: `scp-tui`

```
scp-tui
```

`scp-tui` takes no arguments. Its host menu reads lines that start exactly
with `Host ` (case-sensitive, not indented), takes the first name after the
keyword, and keeps at most 128 hosts. Use Up/Down, Enter to choose and `q`
to quit.

After choosing a host:

| Key              | Action                                              |
|------------------|-----------------------------------------------------|
| Tab, Left, Right | Switch between the local and remote panes           |
| Up / Down        | Move the cursor                                     |
| Enter            | Open the directory under the cursor (`..` goes up)  |
| Space            | Mark or unmark an entry                             |
| F5               | Download the marked remote files                    |
| F6               | Upload the marked local files                       |
| P                | Show or hide dot files                              |
| Q                | Quit                                                |

If nothing is marked, F5 and F6 copy the file under the cursor. Before
overwriting an existing file you are asked to confirm. A progress bar shows
the running transfer; press `q` during a transfer and confirm with `y` to
cancel it.

Remote directories are listed by running `ls -la` over `ssh`, and the `~`
home directory is found from the remote `$HOME` (or guessed from `whoami`).

## What it does not do

- Copies are of single files: `scp` is run without `-r`, so directories are
  not copied recursively.
- Files cannot be renamed, deleted or created from the file manager.
- Remote names are taken from the last column of `ls -la`, so names that
  contain spaces are not listed correctly.
- There is no handling of password prompts; `ssh` and `scp` need to be able
  to log in on their own, for example with key-based authentication.

## Library use

The pieces are importable on their own, for example:

```python
from sshtui.sshconfig import load_hosts, default_config_path

for host in load_hosts(default_config_path()):
    print(host)
```

- `sshtui.sshconfig` reads host aliases (`parse_hosts`, `load_hosts`,
  `parse_host_lines`, `load_host_lines`).
- `sshtui.filelist` holds `FileEntry`, the `FileList` cursor model and
  `read_local_dir`.
- `sshtui.remote` lists and probes remote paths over `ssh`
  (`read_remote_dir`, `parse_listing`, `resolve_remote_path`,
  `remote_file_exists`).
- `sshtui.transfer` runs `scp` in the background and tracks its progress
  (`Transfer`, `Direction`, `parse_percentage`, `scp_command`).
- `sshtui.menu` draws the host menu (`select_host`, `compute_layout`).
- `sshtui.manager` is the two-pane `FileManager`.

## Running the tests

```
pip install .[test]
pytest
```