"""Shell completion scripts for the dev command."""

from devtree.config import SHELLS

ZSH_COMPLETION = r"""#compdef dev

_dev_completion() {
  local context state line
  typeset -A opt_args

  _arguments -C \
    '(-l --list)'{-l,--list}'[List all worktrees with status]' \
    '(-c --create)'{-c,--create}'[Create new branch and worktree]:branch name:' \
    '--cleanup[Remove unused worktrees]' \
    '--completion[Generate shell completion script]:shell:(zsh bash fish)' \
    '*::arg:->args' && return

  case $state in
    args)
      if git rev-parse --git-dir &>/dev/null; then
        local -a branches
        branches=($(git branch -a --format="%(refname:short)" 2>/dev/null | sed 's|origin/||g' | sort -u))
        _describe 'branches' branches
      else
        local -a projects
        local config_dir="${XDG_CONFIG_HOME:-$HOME/.config}/dev/projects"
        if [[ -d "$config_dir" ]]; then
          projects=($(ls -1 "$config_dir" 2>/dev/null | sed 's/\.json$//'))
          _describe 'projects' projects
        fi
      fi
      ;;
  esac
}

compdef _dev_completion dev"""

BASH_COMPLETION = r"""_dev_completion() {
  local cur="${COMP_WORDS[COMP_CWORD]}"
  local opts="--list --create --cleanup --completion --verbose --debug --version init projects config"

  if [[ "$cur" == -* ]]; then
    COMPREPLY=($(compgen -W "$opts" -- "$cur"))
    return
  fi

  local words
  if git rev-parse --git-dir &>/dev/null; then
    words=$(git branch -a --format="%(refname:short)" 2>/dev/null | sed 's|origin/||g' | sort -u)
  else
    local config_dir="${XDG_CONFIG_HOME:-$HOME/.config}/dev/projects"
    words=$(ls -1 "$config_dir" 2>/dev/null | sed 's/\.json$//')
  fi
  COMPREPLY=($(compgen -W "$words init projects config" -- "$cur"))
}

complete -F _dev_completion dev"""

FISH_COMPLETION = r"""function __dev_targets
    if git rev-parse --git-dir >/dev/null 2>&1
        git branch -a --format="%(refname:short)" 2>/dev/null | sed 's|origin/||g' | sort -u
    else
        set -l config_dir (set -q XDG_CONFIG_HOME; and echo $XDG_CONFIG_HOME; or echo $HOME/.config)/dev/projects
        ls -1 $config_dir 2>/dev/null | sed 's/\.json$//'
    end
end

complete -c dev -s l -l list -d 'List all worktrees with status'
complete -c dev -s c -l create -r -d 'Create new branch and worktree'
complete -c dev -l cleanup -d 'Remove unused worktrees'
complete -c dev -l completion -xa 'zsh bash fish' -d 'Generate shell completion script'
complete -c dev -f -a '(__dev_targets) init projects config'"""

SCRIPTS = {
    "zsh": ZSH_COMPLETION,
    "bash": BASH_COMPLETION,
    "fish": FISH_COMPLETION,
}

INSTALL_INSTRUCTIONS = {
    "zsh": [
        "# To install this completion script:",
        "# 1. Save the output to a file: dev --completion zsh > ~/.zsh_completions/_dev",
        "# 2. Add this line to your ~/.zshrc: fpath=(~/.zsh_completions $fpath)",
        "# 3. Add this line to your ~/.zshrc: autoload -U compinit && compinit",
        "# 4. Restart your shell or run: source ~/.zshrc",
    ],
    "bash": [
        "# To install this completion script:",
        "# 1. Save the output to a file: dev --completion bash > ~/.dev-completion.bash",
        "# 2. Add this line to your ~/.bashrc: source ~/.dev-completion.bash",
    ],
    "fish": [
        "# To install this completion script:",
        "# dev --completion fish > ~/.config/fish/completions/dev.fish",
    ],
}


def completion_script(shell: str) -> str:
    """Completion script plus install instructions for ``shell``."""
    shell = shell.lower()
    if shell not in SHELLS:
        raise ValueError(f"Unsupported shell: {shell}")
    return "\n".join([SCRIPTS[shell], "", *INSTALL_INSTRUCTIONS[shell]])
